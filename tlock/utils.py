"""Helper utility functions: round identities, byte masks and hex strings.
"""

import hashlib
import struct

from tlock.errors import InvalidRound

MAX_ROUND = 2**64 - 1


def hash_round(round_number):
    """Derive the identity of a beacon round.

    The beacon signs SHA-256 of the round number written as an unsigned
    64-bit big-endian integer, so this byte layout must not change.

    Parameters
    ----------
    round_number : int
        beacon round, between 0 and 2**64 - 1 inclusive

    Returns
    -------
    bytes
        32-byte identity of `round_number`
    """
    if isinstance(round_number, bool) or not isinstance(round_number, int):
        raise InvalidRound(round_number)
    if not 0 <= round_number <= MAX_ROUND:
        raise InvalidRound(round_number)
    return hashlib.sha256(struct.pack(">Q", round_number)).digest()


def xor(a, b):
    """XOR two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError("cannot xor {} bytes with {} bytes".format(len(a), len(b)))
    return bytes(x ^ y for x, y in zip(a, b))


def to_hex(data):
    """Render bytes as `0x` followed by lowercase hex."""
    return "0x" + bytes(data).hex()


def from_hex(value):
    """Parse a hex string, with or without a `0x` prefix, into bytes."""
    if value[:2] in ("0x", "0X"):
        value = value[2:]
    return bytes.fromhex(value)


def as_bytes(value):
    """Accept raw bytes or a hex string (beacon JSON carries hex)."""
    if isinstance(value, str):
        return from_hex(value)
    return bytes(value)
