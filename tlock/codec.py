"""Ciphertext encodings: the flat `U || V || W` wire form and per-field hex.
"""

import logging

from tlock.errors import AmbiguousLength, MalformedCiphertext, NegativeLength, TooShort
from tlock.objects import DEFAULT_SCHEME, Ciphertext
from tlock.utils import from_hex, to_hex

logger = logging.getLogger(__name__)

U_LENGTH = DEFAULT_SCHEME.u_length


def serialize(ct):
    """Concatenate `U`, `V` and `W`, without length prefixes."""
    return ct.U + ct.V + ct.W


def deserialize(data, v_length=None, w_length=None, u_length=U_LENGTH):
    """Split a flat ciphertext back into its three parts.

    Parameters
    ----------
    data : bytes
        serialised ciphertext
    v_length : int (optional)
        length of `V`; inferred as half of what follows `U` if omitted
    w_length : int (optional)
        length of `W`; defaults to `v_length`
    u_length : int (optional)
        length of `U`, 96 unless the scheme encapsulates in G1

    Returns
    -------
    Ciphertext

    Raises
    ------
    TooShort
        fewer bytes than `U` (or than the explicit lengths) need
    AmbiguousLength
        `v_length` omitted and an odd number of bytes follow `U`
    NegativeLength
        an explicit length is below zero
    """
    data = bytes(data)
    if len(data) < u_length:
        raise TooShort(len(data), u_length)
    remaining = len(data) - u_length
    if v_length is None:
        if remaining % 2 != 0:
            raise AmbiguousLength(remaining)
        v_length = remaining // 2
    if w_length is None:
        w_length = v_length
    if v_length < 0:
        raise NegativeLength("V", v_length)
    if w_length < 0:
        raise NegativeLength("W", w_length)
    if remaining < v_length + w_length:
        raise TooShort(len(data), u_length + v_length + w_length)
    if remaining > v_length + w_length:
        logger.debug("ignoring %d trailing bytes", remaining - v_length - w_length)

    U = data[:u_length]
    V = data[u_length:u_length + v_length]
    W = data[u_length + v_length:u_length + v_length + w_length]
    return Ciphertext(U, V, W)


def to_hex_fields(ct):
    """Hex-encode each part as `0x` + lowercase hex, the form proof systems and contracts take."""
    return {"U": to_hex(ct.U), "V": to_hex(ct.V), "W": to_hex(ct.W)}


def from_hex_fields(fields):
    """Inverse of `to_hex_fields`; the `0x` prefix is optional."""
    try:
        return Ciphertext(from_hex(fields["U"]), from_hex(fields["V"]), from_hex(fields["W"]))
    except KeyError as err:
        raise MalformedCiphertext("missing field {}".format(err)) from err
    except ValueError as err:
        raise MalformedCiphertext("bad hex: {}".format(err)) from err
