#!/usr/bin/env python3

"""Implementation of the timelock IBE algorithms (Enc, Dec) and their hash functions.

The scheme is Boneh-Franklin identity-based encryption with a
Fujisaki-Okamoto style transform, as deployed by drand's tlock. The
identity is the hash of a beacon round; the beacon's signature on that
round is the identity's private key.

Notation follows the tlock construction:

* `Q` is the hashed identity, in the signature group
* `master` is the beacon public key, in the key group
* `sigma` is a random value as long as the message
* `r = H3(sigma, m)`, `U = r * G`, `V = sigma ^ H2(e(Q, master)^r)`,
  `W = m ^ H4(sigma)`
"""

import hashlib
import hmac
import logging
import secrets
from collections import namedtuple

from tlock.codec import deserialize
from tlock.config import Config
from tlock.errors import (
    EmptyPlaintext,
    IntegrityCheckFailed,
    InvalidPublicKey,
    MalformedCiphertext,
    PointError,
    ScalarDerivationFailed,
)
from tlock.objects import DEFAULT_SCHEME, Ciphertext, get_scheme
from tlock.pairing import default_engine
from tlock.utils import as_bytes, hash_round, xor

logger = logging.getLogger(__name__)

H2_TAG = b"IBE-H2"
H3_TAG = b"IBE-H3"
H4_TAG = b"IBE-H4"

# BLS12-381's r has 255 bits: drop the top bit of each candidate
BITS_TO_MASK = 1

_Group = namedtuple("_Group", ["generator", "mul", "compress", "decompress", "hash"])


def _group(engine, index):
    if index == 1:
        return _Group(engine.g1_generator(), engine.mul_g1, engine.compress_g1,
                      engine.decompress_g1, engine.hash_to_g1)
    return _Group(engine.g2_generator(), engine.mul_g2, engine.compress_g2,
                  engine.decompress_g2, engine.hash_to_g2)


def _pair(engine, scheme, signature_side, key_side):
    if scheme.signature_group == 1:
        return engine.pairing(signature_side, key_side)
    return engine.pairing(key_side, signature_side)


def _expand(tag, data, length):
    # one SHA-256 block covers masks up to 32 bytes, which is all tlock
    # itself ever uses; longer masks append counter-suffixed blocks
    out = hashlib.sha256(tag + data).digest()
    counter = 1
    while len(out) < length:
        out += hashlib.sha256(tag + data + counter.to_bytes(4, "big")).digest()
        counter += 1
    return out[:length]


def gt_to_hash(engine, value, length):
    """H2: hash a pairing value down to a `length`-byte mask."""
    return _expand(H2_TAG, engine.gt_to_bytes(value), length)


def h3(sigma, msg, order):
    """H3: derive the encryption scalar `r` from `sigma` and the message.

    Parameters
    ----------
    sigma : bytes
        blinding value
    msg : bytes
        plaintext
    order : int
        group order r

    Returns
    -------
    int
        scalar in [0, order)

    Notes
    -----
    `H(i || H("IBE-H3" || sigma || msg))` is computed for i = 1, 2, ...
    (i as a little-endian uint16) with the top bit cleared, until the
    big-endian value falls below `order`.
    """
    h = hashlib.sha256(H3_TAG + sigma + msg).digest()
    for i in range(1, 65535):
        data = bytearray(hashlib.sha256(i.to_bytes(2, "little") + h).digest())
        data[0] = data[0] >> BITS_TO_MASK
        n = int.from_bytes(data, "big")
        if n < order:
            return n
    raise ScalarDerivationFailed()


def h4(sigma, length):
    """H4: derive the `length`-byte plaintext mask from `sigma`."""
    return _expand(H4_TAG, sigma, length)


def encrypt(public_key, identity, plaintext, scheme=DEFAULT_SCHEME, engine=None, allow_empty=True):
    """Encrypt a message to an identity.

    Parameters
    ----------
    public_key : bytes or str
        compressed beacon public key (raw or hex)
    identity : bytes
        identity to encrypt to, usually `hash_round(round)`
    plaintext : bytes
        message to encrypt
    scheme : Scheme or str (optional)
        beacon scheme, quicknet's `bls-unchained-g1-rfc9380` by default
    engine : PairingEngine (optional)
        pairing backend, the shared `PyEccEngine` by default
    allow_empty : bool (optional)
        accept a zero-length plaintext

    Returns
    -------
    Ciphertext
        `(U, V, W)` with `len(V) == len(W) == len(plaintext)`

    Raises
    ------
    InvalidPublicKey
        `public_key` is not a valid point of the scheme's key group
    EmptyPlaintext
        `plaintext` is empty and `allow_empty` is off
    """
    scheme = get_scheme(scheme)
    engine = engine or default_engine()
    plaintext = bytes(plaintext)
    if not plaintext and not allow_empty:
        raise EmptyPlaintext()

    key_group = _group(engine, scheme.key_group)
    signature_group = _group(engine, scheme.signature_group)
    try:
        master = key_group.decompress(as_bytes(public_key))
    except PointError as err:
        raise InvalidPublicKey(err.message) from err
    except ValueError as err:
        raise InvalidPublicKey(str(err)) from err

    q_id = signature_group.hash(bytes(identity), scheme.dst)
    sigma = secrets.token_bytes(len(plaintext))
    r = h3(sigma, plaintext, engine.order)

    U = key_group.compress(key_group.mul(key_group.generator, r))
    # e(Q, master)^r computed as e(Q, r * master)
    r_gid = _pair(engine, scheme, q_id, key_group.mul(master, r))
    V = xor(sigma, gt_to_hash(engine, r_gid, len(sigma)))
    W = xor(plaintext, h4(sigma, len(plaintext)))

    logger.debug("encrypted %d bytes under scheme %s", len(plaintext), scheme.scheme_id)
    return Ciphertext(U, V, W)


def decrypt(signature, ciphertext, scheme=DEFAULT_SCHEME, engine=None, checked=True):
    """Decrypt a ciphertext with the beacon signature for its round.

    Parameters
    ----------
    signature : bytes or str
        compressed round signature (raw or hex), the identity's private key
    ciphertext : Ciphertext
        ciphertext to decrypt
    scheme : Scheme or str (optional)
        beacon scheme, quicknet's `bls-unchained-g1-rfc9380` by default
    engine : PairingEngine (optional)
        pairing backend, the shared `PyEccEngine` by default
    checked : bool (optional)
        recompute `U' = H3(sigma', m') * G` and require `U' == U`. With
        `checked=False` every well-formed ciphertext decrypts to some bytes,
        so tampering goes unnoticed and the scheme is only IND-ID-CPA.

    Returns
    -------
    bytes
        the plaintext

    Raises
    ------
    MalformedCiphertext
        `U` or `signature` does not decode to a valid point, or `V` and `W`
        differ in length
    IntegrityCheckFailed
        `checked` is on and the ciphertext was not produced for this
        signature (wrong round, wrong beacon, or tampered)
    """
    scheme = get_scheme(scheme)
    engine = engine or default_engine()
    if not checked:
        logger.warning("decrypting without the integrity check: tampered ciphertexts will not be detected")

    if len(ciphertext.V) != len(ciphertext.W):
        raise MalformedCiphertext("V has {} bytes but W has {}".format(len(ciphertext.V), len(ciphertext.W)))
    if len(ciphertext.U) != scheme.u_length:
        raise MalformedCiphertext("U must be {} bytes, got {}".format(scheme.u_length, len(ciphertext.U)))

    key_group = _group(engine, scheme.key_group)
    signature_group = _group(engine, scheme.signature_group)
    try:
        U = key_group.decompress(ciphertext.U)
    except PointError as err:
        raise MalformedCiphertext("U: " + err.message) from err
    try:
        private = signature_group.decompress(as_bytes(signature))
    except PointError as err:
        raise MalformedCiphertext("round signature: " + err.message) from err
    except ValueError as err:
        raise MalformedCiphertext("round signature: " + str(err)) from err

    g_id = _pair(engine, scheme, private, U)
    sigma = xor(ciphertext.V, gt_to_hash(engine, g_id, len(ciphertext.V)))
    msg = xor(ciphertext.W, h4(sigma, len(ciphertext.W)))

    if checked:
        r = h3(sigma, msg, engine.order)
        expected = key_group.compress(key_group.mul(key_group.generator, r))
        if not hmac.compare_digest(expected, ciphertext.U):
            raise IntegrityCheckFailed()
    return msg


def encrypt_message(data, round_number, public_key, config=None, engine=None):
    """Encrypt a string or bytes for a future beacon round.

    Parameters
    ----------
    data : str or bytes
        message; strings are UTF-8 encoded
    round_number : int
        round whose signature will unlock the message
    public_key : bytes or str
        beacon public key, raw or hex as in the chain info
    config : Config (optional)
        encryption policy

    Returns
    -------
    Ciphertext
    """
    config = config or Config()
    if isinstance(data, str):
        data = data.encode("utf-8")
    logger.debug("encrypting to round %d", round_number)
    return encrypt(public_key, hash_round(round_number), data,
                   scheme=config.scheme, engine=engine, allow_empty=config.allow_empty)


def decrypt_message(ciphertext, signature, config=None, engine=None):
    """Decrypt a `Ciphertext` (or its serialised bytes) with a round signature."""
    config = config or Config()
    if isinstance(ciphertext, (bytes, bytearray)):
        ciphertext = deserialize(ciphertext, u_length=config.scheme.u_length)
    return decrypt(signature, ciphertext, scheme=config.scheme, engine=engine, checked=config.checked)


def decrypt_to_string(ciphertext, signature, config=None, engine=None):
    """Decrypt and decode the plaintext as UTF-8."""
    return decrypt_message(ciphertext, signature, config=config, engine=engine).decode("utf-8")
