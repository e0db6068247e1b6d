"""
Timelock test fixtures: a local beacon with a known master secret.
"""

import pytest
from py_ecc.bls.point_compression import modular_squareroot_in_FQ2
from py_ecc.optimized_bls12_381 import FQ2, b2

from tlock.objects import PEDERSEN_UNCHAINED, QUICKNET
from tlock.pairing import default_engine
from tlock.utils import hash_round

MASTER_SECRET = 0x2F1C_5A07_9B3E_64D2_8C11_F0A4_7E95_3B6D_C2A8_1D4F_6E07_93B5_0A2C_E4F1_7D68_39A1

# e(G1, G2) in kilic order: c1.c2.c1, c1.c2.c0, c1.c1.c1, ..., c0.c0.c0
GT_GENERATOR_HEX = (
    "0f41e58663bf08cf068672cbd01a7ec73baca4d72ca93544deff686bfd6df543d48eaa24afe47e1efde449383b676631"
    "04c581234d086a9902249b64728ffd21a189e87935a954051c7cdba7b3872629a4fafc05066245cb9108f0242d0fe3ef"
    "03350f55a7aefcd3c31b4fcb6ce5771cc6a0e9786ab5973320c806ad360829107ba810c5a09ffdd9be2291a0c25a99a2"
    "11b8b424cd48bf38fcef68083b0b0ec5c81a93b330ee1a677d0d15ff7b984e8978ef48881e32fac91b93b47333e2ba57"
    "06fba23eb7c5af0d9f80940ca771b6ffd5857baaf222eb95a7d2809d61bfe02e1bfd1b68ff02f0b8102ae1c2d5d5ab1a"
    "19f26337d205fb469cd6bd15c3d5a04dc88784fbb3d0b2dbdea54d43b2b73f2cbb12d58386a8703e0f948226e47ee89d"
    "018107154f25a764bd3c79937a45b84546da634b8f6be14a8061e55cceba478b23f7dacaa35c8ca78beae9624045b4b6"
    "01b2f522473d171391125ba84dc4007cfbf2f8da752f7c74185203fcca589ac719c34dffbbaad8431dad1c1fb597aaa5"
    "193502b86edb8857c273fa075a50512937e0794e1e65a7617c90d8bd66065b1fffe51d7a579973b1315021ec3c19934f"
    "1368bb445c7c2d209703f239689ce34c0378a68e72a6b3b216da0e22a5031b54ddff57309396b38c881c4c849ec23e87"
    "089a1c5b46e5110b86750ec6a532348868a84045483c92b7af5af689452eafabf1a8943e50439f1d59882a98eaa0170f"
    "1250ebd871fc0a92a7b2d83168d0d727272d441befa15c503dd8e90ce98db3e7b6d194f60839c508a84305aaca1789b6"
)


class LocalBeacon:
    """Signs rounds the way a drand network does, with a single known secret."""

    def __init__(self, engine, scheme, secret):
        self.engine = engine
        self.scheme = scheme
        self.secret = secret
        if scheme.key_group == 2:
            self.public_key = engine.compress_g2(engine.mul_g2(engine.g2_generator(), secret))
        else:
            self.public_key = engine.compress_g1(engine.mul_g1(engine.g1_generator(), secret))
        self._signatures = {}

    def sign(self, round_number):
        """Round signature: secret * H(identity) in the signature group."""
        if round_number not in self._signatures:
            identity = hash_round(round_number)
            if self.scheme.signature_group == 1:
                q = self.engine.hash_to_g1(identity, self.scheme.dst)
                sig = self.engine.compress_g1(self.engine.mul_g1(q, self.secret))
            else:
                q = self.engine.hash_to_g2(identity, self.scheme.dst)
                sig = self.engine.compress_g2(self.engine.mul_g2(q, self.secret))
            self._signatures[round_number] = sig
        return self._signatures[round_number]


@pytest.fixture(scope="session")
def engine():
    """Shared pairing engine."""
    return default_engine()


@pytest.fixture(scope="session")
def beacon(engine) -> LocalBeacon:
    """Beacon on the default (quicknet) scheme."""
    return LocalBeacon(engine, QUICKNET, MASTER_SECRET)


@pytest.fixture(scope="session")
def pedersen_beacon(engine) -> LocalBeacon:
    """Beacon with G1 public keys and G2 signatures."""
    return LocalBeacon(engine, PEDERSEN_UNCHAINED, MASTER_SECRET)


@pytest.fixture(scope="session")
def hello_ciphertext(beacon):
    """'Hello, world!' encrypted to round 128."""
    from tlock.algos import encrypt_message
    return encrypt_message("Hello, world!", 128, beacon.public_key)


@pytest.fixture(scope="session")
def gt_generator() -> bytes:
    """Canonical encoding of e(G1, G2)."""
    return bytes.fromhex(GT_GENERATOR_HEX)


@pytest.fixture(scope="session")
def off_subgroup_g2(engine) -> bytes:
    """Compressed point on the G2 twist but outside the order-r subgroup."""
    x0 = 1
    while True:
        x = FQ2([x0, 0])
        y = modular_squareroot_in_FQ2(x ** 3 + b2)
        if y is not None:
            return engine.compress_g2((x, y, FQ2.one()))
        x0 += 1
