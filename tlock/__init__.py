"""Identity-based timelock encryption against the drand randomness beacon.

A message is encrypted to a future beacon round using only the beacon's
public key. It can be decrypted once the beacon has published its
signature for that round, which acts as the private key of the round's
identity in the Boneh-Franklin IBE scheme.

Notes
-----
The construction, hash functions and encodings are those of drand's tlock,
so ciphertexts interoperate with other tlock implementations for messages
of up to 32 bytes.

References
----------
[BF01] D. Boneh, M. Franklin. Identity-Based Encryption from the Weil Pairing.
CRYPTO 2001.

[GLS23] N. Gailly, K. Melissaris, Y. Romailler. tlock: Practical Timelock
Encryption from Threshold BLS. Cryptology ePrint Archive paper [2023/189](https://eprint.iacr.org/2023/189).

Examples
--------
Encrypt to round 128 with the beacon public key from its chain info:

>>> from tlock.algos import encrypt_message
>>> ct = encrypt_message("Hello, world!", 128, chain_info.public_key)

Serialise it for storage, or hex-encode each part for a contract:

>>> from tlock.codec import serialize, to_hex_fields
>>> blob = serialize(ct)
>>> fields = to_hex_fields(ct)

Once round 128 is out, decrypt with its signature:

>>> from tlock.algos import decrypt_to_string
>>> decrypt_to_string(ct, round_data.signature)
'Hello, world!'
"""

__version__ = "1.0"
