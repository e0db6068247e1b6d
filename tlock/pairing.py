"""Pairing engine: group arithmetic, point encodings and hash-to-curve on BLS12-381.

The encryption code only talks to the `PairingEngine` capability set, so a
different pairing backend can be dropped in by passing another object with
the same methods. `PyEccEngine` is the default backend, built on py_ecc.

Notes
-----
Encodings follow the ZCash compressed format used by drand: 48 bytes for G1
and 96 bytes for G2 (imaginary part of x first). Every decoded point is
checked to be on the curve and in the prime-order subgroup.

GT elements are serialised the way kilic/kyber (and therefore drand and
tlock) do: the Fp6 coefficient c1 before c0, within each Fp6 the Fp2
coefficients c2, c1, c0, within each Fp2 the imaginary part first, every
base field element as 48 big-endian bytes.
"""

import hashlib
import logging
import threading
from typing import Protocol

from py_ecc.bls.hash_to_curve import hash_to_G1, hash_to_G2
from py_ecc.bls.point_compression import (
    compress_G1,
    compress_G2,
    decompress_G1,
    decompress_G2,
)
from py_ecc.optimized_bls12_381 import (
    G1,
    G2,
    Z1,
    Z2,
    add,
    curve_order,
    double,
    eq,
    field_modulus,
    is_inf,
)
from py_ecc.optimized_bls12_381 import pairing as ate_pairing

from tlock.errors import InvalidEncoding, NotInSubgroup

logger = logging.getLogger(__name__)

G1_SIZE = 48
G2_SIZE = 96
FP_SIZE = 48
GT_SIZE = 12 * FP_SIZE

ORDER_BITS = curve_order.bit_length()


class PairingEngine(Protocol):
    """Capabilities the IBE algorithms need from a pairing-friendly curve.

    Points are opaque to callers; only the engine creates, combines and
    encodes them.
    """

    order: int

    def g1_generator(self): ...
    def g2_generator(self): ...
    def add_g1(self, a, b): ...
    def add_g2(self, a, b): ...
    def mul_g1(self, point, scalar): ...
    def mul_g2(self, point, scalar): ...
    def compress_g1(self, point) -> bytes: ...
    def compress_g2(self, point) -> bytes: ...
    def decompress_g1(self, data: bytes, allow_identity: bool = False): ...
    def decompress_g2(self, data: bytes, allow_identity: bool = False): ...
    def hash_to_g1(self, message: bytes, dst: bytes): ...
    def hash_to_g2(self, message: bytes, dst: bytes): ...
    def eq(self, a, b) -> bool: ...
    def pairing(self, p1, p2): ...
    def gt_to_bytes(self, value) -> bytes: ...
    def is_identity(self, point) -> bool: ...


def _ladder(point, scalar, zero):
    # Montgomery ladder over a fixed number of bits: one add and one double
    # per bit whatever the bit value is.
    r0, r1 = zero, point
    for i in reversed(range(ORDER_BITS)):
        if (scalar >> i) & 1:
            r0, r1 = add(r0, r1), double(r1)
        else:
            r0, r1 = double(r0), add(r0, r1)
    return r0


def _as_int(c):
    return c.n if hasattr(c, "n") else int(c)


class PyEccEngine:
    """BLS12-381 backend on top of `py_ecc.optimized_bls12_381`.

    Attributes
    ----------
    order : int
        prime order r of G1, G2 and GT
    """

    order = curve_order

    def g1_generator(self):
        return G1

    def g2_generator(self):
        return G2

    def add_g1(self, a, b):
        return add(a, b)

    def add_g2(self, a, b):
        return add(a, b)

    def eq(self, a, b):
        """Compare two points of the same group, whatever their projective scaling."""
        return eq(a, b)

    def mul_g1(self, point, scalar):
        return _ladder(point, scalar % curve_order, Z1)

    def mul_g2(self, point, scalar):
        return _ladder(point, scalar % curve_order, Z2)

    def compress_g1(self, point):
        return compress_G1(point).to_bytes(G1_SIZE, "big")

    def compress_g2(self, point):
        z1, z2 = compress_G2(point)
        return z1.to_bytes(FP_SIZE, "big") + z2.to_bytes(FP_SIZE, "big")

    def decompress_g1(self, data, allow_identity=False):
        """Decode and validate a compressed G1 point.

        Parameters
        ----------
        data : bytes
            48-byte compressed point
        allow_identity : bool (optional)
            accept the point at infinity

        Raises
        ------
        InvalidEncoding
            `data` is not the encoding of a curve point (or is the identity
            while `allow_identity` is off)
        NotInSubgroup
            the point is on the curve but outside the order-r subgroup
        """
        data = bytes(data)
        if len(data) != G1_SIZE:
            raise InvalidEncoding("G1", "expected {} bytes, got {}".format(G1_SIZE, len(data)))
        try:
            point = decompress_G1(int.from_bytes(data, "big"))
        except ValueError as err:
            raise InvalidEncoding("G1", str(err)) from err
        return self._check(point, Z1, "G1", allow_identity)

    def decompress_g2(self, data, allow_identity=False):
        """Decode and validate a compressed G2 point, see `decompress_g1`."""
        data = bytes(data)
        if len(data) != G2_SIZE:
            raise InvalidEncoding("G2", "expected {} bytes, got {}".format(G2_SIZE, len(data)))
        z1 = int.from_bytes(data[:FP_SIZE], "big")
        z2 = int.from_bytes(data[FP_SIZE:], "big")
        try:
            point = decompress_G2((z1, z2))
        except ValueError as err:
            raise InvalidEncoding("G2", str(err)) from err
        return self._check(point, Z2, "G2", allow_identity)

    def _check(self, point, zero, group, allow_identity):
        if is_inf(point):
            if allow_identity:
                return point
            raise InvalidEncoding(group, "point at infinity")
        if not is_inf(_ladder(point, curve_order, zero)):
            raise NotInSubgroup(group)
        return point

    def hash_to_g1(self, message, dst):
        return hash_to_G1(message, dst, hashlib.sha256)

    def hash_to_g2(self, message, dst):
        return hash_to_G2(message, dst, hashlib.sha256)

    def pairing(self, p1, p2):
        """Compute e(p1, p2) for p1 in G1 and p2 in G2.

        Notes
        -----
        py_ecc's final exponentiation yields f with conj(f^3) equal to the
        optimal-ate pairing, so the value is cubed here and conjugated when
        encoded by `gt_to_bytes`.
        """
        return ate_pairing(p2, p1) ** 3

    def gt_to_bytes(self, value):
        # py_ecc represents Fp12 as Fp[w]/(w^12 - 2w^6 + 2), the same w as
        # the Fp2 -> Fp6 -> Fp12 tower with u = w^6 - 1. Its Miller loop
        # runs over |x|; BLS12-381 has x < 0, so the canonical value is the
        # conjugate (w -> -w) of what `pairing` returns.
        coeffs = [_as_int(c) % field_modulus for c in value.coeffs]
        out = bytearray()
        for half in (1, 0):
            for j in (2, 1, 0):
                e = 2 * j + half
                im = coeffs[e + 6]
                re = coeffs[e] + im
                if half:
                    im, re = -im, -re
                out += (im % field_modulus).to_bytes(FP_SIZE, "big")
                out += (re % field_modulus).to_bytes(FP_SIZE, "big")
        return bytes(out)

    def is_identity(self, point):
        return is_inf(point)


_default_engine = None
_default_engine_lock = threading.Lock()


def default_engine():
    """Return the process-wide `PyEccEngine`, creating it on first use."""
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                logger.debug("initialising default pairing engine")
                _default_engine = PyEccEngine()
    return _default_engine
