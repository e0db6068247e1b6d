#!/usr/bin/env python3

"""Objects to represent timelock ciphertexts, beacon schemes and beacon data.
"""

from dataclasses import dataclass, field
from math import floor

from tlock.errors import UnknownScheme
from tlock.pairing import G1_SIZE, G2_SIZE
from tlock.utils import as_bytes, hash_round

DST_G1 = b"BLS_SIG_BLS12381G1_XMD:SHA-256_SSWU_RO_NUL_"
DST_G2 = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"


@dataclass(frozen=True)
class Ciphertext:
    """Timelock ciphertext.

    Parameters
    ----------
    U : bytes
        compressed encapsulation point `r * G` (96 bytes for the default
        scheme, where it lives in G2)
    V : bytes
        the blinding value `sigma` masked with the hashed pairing value
    W : bytes
        the plaintext masked with the hashed `sigma`
    """
    U: bytes
    V: bytes
    W: bytes

    def __post_init__(self):
        for name in ("U", "V", "W"):
            object.__setattr__(self, name, bytes(getattr(self, name)))

    def size(self):
        """Calculate the size (in bytes) of the serialised ciphertext."""
        return len(self.U) + len(self.V) + len(self.W)


@dataclass(frozen=True)
class Scheme:
    """A beacon signature scheme, as far as encryption is concerned.

    Attributes
    ----------
    scheme_id : str
        identifier the beacon publishes in its chain info (`schemeID`)
    signature_group : int
        group (1 or 2) holding round signatures and hashed round identities;
        public keys and the encapsulation point `U` live in the other group
    dst : bytes
        hash-to-curve domain separation tag for round identities
    """
    scheme_id: str
    signature_group: int
    dst: bytes

    @property
    def key_group(self):
        return 3 - self.signature_group

    @property
    def u_length(self):
        return G2_SIZE if self.key_group == 2 else G1_SIZE

    @property
    def signature_length(self):
        return G1_SIZE if self.signature_group == 1 else G2_SIZE

    @property
    def public_key_length(self):
        return self.u_length


QUICKNET = Scheme("bls-unchained-g1-rfc9380", 1, DST_G1)
# quicknet's predecessor hashed onto G1 with the G2 tag
UNCHAINED_ON_G1 = Scheme("bls-unchained-on-g1", 1, DST_G2)
PEDERSEN_UNCHAINED = Scheme("pedersen-bls-unchained", 2, DST_G2)

SCHEMES = {s.scheme_id: s for s in (QUICKNET, UNCHAINED_ON_G1, PEDERSEN_UNCHAINED)}
DEFAULT_SCHEME = QUICKNET


def get_scheme(scheme):
    """Resolve a `Scheme` or a scheme id string."""
    if isinstance(scheme, Scheme):
        return scheme
    try:
        return SCHEMES[scheme]
    except KeyError:
        raise UnknownScheme(str(scheme)) from None


@dataclass(frozen=True)
class ChainInfo:
    """Beacon chain information, as published at `<chain>/info`.

    Only the parsing and the round/time arithmetic live here; fetching it
    over the network is the caller's job.
    """
    public_key: str
    period: int
    genesis_time: int
    hash: str
    scheme_id: str = DEFAULT_SCHEME.scheme_id
    group_hash: str = ""
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        return cls(
            public_key=data["public_key"],
            period=int(data["period"]),
            genesis_time=int(data["genesis_time"]),
            hash=data.get("hash", ""),
            scheme_id=data.get("schemeID", DEFAULT_SCHEME.scheme_id),
            group_hash=data.get("groupHash", ""),
            metadata=dict(data.get("metadata") or {}),
        )

    @property
    def public_key_bytes(self):
        return as_bytes(self.public_key)

    @property
    def scheme(self):
        return get_scheme(self.scheme_id)

    def round_at(self, t):
        """Round being produced at unix time `t` (0 before genesis)."""
        if t < self.genesis_time:
            return 0
        return int(floor((t - self.genesis_time) / self.period)) + 1

    def round_time(self, round_number):
        """Unix time at which `round_number` is published."""
        if round_number < 1:
            return self.genesis_time
        return self.genesis_time + (round_number - 1) * self.period


@dataclass(frozen=True)
class RoundData:
    """Beacon output for one round, as published at `<chain>/public/<round>`."""
    round: int
    randomness: str
    signature: str

    @classmethod
    def from_dict(cls, data):
        return cls(
            round=int(data["round"]),
            randomness=data.get("randomness", ""),
            signature=data["signature"],
        )

    @property
    def signature_bytes(self):
        return as_bytes(self.signature)

    @property
    def identity(self):
        return hash_round(self.round)
