"""
Round identity and helper tests
"""

import hashlib

import pytest

from tlock.errors import InvalidRound
from tlock.utils import MAX_ROUND, as_bytes, from_hex, hash_round, to_hex, xor


class TestHashRound:
    """Tests for round identities."""

    def test_length(self):
        """Identities are SHA-256 digests."""
        assert len(hash_round(128)) == 32

    def test_big_endian_layout(self):
        """The round is hashed as 8 big-endian bytes."""
        expected = hashlib.sha256(bytes([0, 0, 0, 0, 0, 0, 0, 0x80])).digest()
        assert hash_round(128) == expected

    def test_deterministic(self):
        """Repeated calls give the same identity."""
        assert hash_round(1337) == hash_round(1337)

    def test_distinct_rounds(self):
        """Neighbouring rounds have different identities."""
        assert hash_round(128) != hash_round(129)

    def test_bounds(self):
        """Round 0 and the largest uint64 are accepted."""
        assert hash_round(0) == hashlib.sha256(bytes(8)).digest()
        assert hash_round(MAX_ROUND) == hashlib.sha256(b"\xff" * 8).digest()

    @pytest.mark.parametrize("bad", [-1, 2**64, 1.5, "128", None, True])
    def test_invalid_rounds(self, bad):
        """Values outside uint64 are rejected."""
        with pytest.raises(InvalidRound):
            hash_round(bad)


class TestHelpers:
    """Tests for byte and hex helpers."""

    def test_xor(self):
        assert xor(b"\x0f\xf0", b"\xff\xff") == b"\xf0\x0f"
        assert xor(b"", b"") == b""

    def test_xor_length_mismatch(self):
        with pytest.raises(ValueError):
            xor(b"ab", b"a")

    def test_to_hex(self):
        """0x prefix, lowercase."""
        assert to_hex(b"\xab\xcd") == "0xabcd"
        assert to_hex(b"") == "0x"

    def test_from_hex(self):
        assert from_hex("0xABcd") == b"\xab\xcd"
        assert from_hex("abcd") == b"\xab\xcd"

    def test_as_bytes(self):
        assert as_bytes("0x01") == b"\x01"
        assert as_bytes(bytearray(b"\x01")) == b"\x01"
