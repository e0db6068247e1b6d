"""
Ciphertext codec tests
"""

import os

import pytest

from tlock.codec import deserialize, from_hex_fields, serialize, to_hex_fields
from tlock.errors import AmbiguousLength, CodecError, MalformedCiphertext, NegativeLength, TooShort
from tlock.objects import Ciphertext


def _ciphertext(n, u_length=96):
    return Ciphertext(os.urandom(u_length), os.urandom(n), os.urandom(n))


class TestWireFormat:
    """Tests for the flat U || V || W encoding."""

    @pytest.mark.parametrize("n", [0, 1, 13, 32, 100])
    def test_length(self, n):
        assert len(serialize(_ciphertext(n))) == 96 + 2 * n

    def test_concatenation(self):
        ct = Ciphertext(b"u" * 96, b"vv", b"ww")
        assert serialize(ct) == b"u" * 96 + b"vvww"

    @pytest.mark.parametrize("n", [0, 8, 13])
    def test_symmetry_inferred(self, n):
        ct = _ciphertext(n)
        assert deserialize(serialize(ct)) == ct

    def test_symmetry_explicit(self):
        ct = _ciphertext(13)
        assert deserialize(serialize(ct), 13, 13) == ct
        assert deserialize(serialize(ct), v_length=13) == ct

    def test_unequal_lengths(self):
        """Explicit lengths can split V and W unevenly."""
        ct = Ciphertext(b"u" * 96, b"v" * 3, b"w" * 5)
        assert deserialize(serialize(ct), 3, 5) == ct

    def test_real_ciphertext(self, hello_ciphertext):
        data = serialize(hello_ciphertext)
        assert len(data) == 96 + 2 * 13
        assert deserialize(data) == hello_ciphertext

    def test_ambiguous(self):
        with pytest.raises(AmbiguousLength):
            deserialize(bytes(96 + 3))

    def test_too_short(self):
        with pytest.raises(TooShort):
            deserialize(bytes(95))

    def test_explicit_lengths_too_long(self):
        with pytest.raises(TooShort):
            deserialize(bytes(96 + 4), v_length=3)

    @pytest.mark.parametrize("v_length,w_length", [(-1, None), (2, -1)])
    def test_negative_lengths(self, v_length, w_length):
        with pytest.raises(NegativeLength):
            deserialize(bytes(96 + 4), v_length, w_length)

    def test_codec_errors_share_base(self):
        with pytest.raises(CodecError):
            deserialize(b"")

    def test_g1_encapsulation(self):
        ct = _ciphertext(5, u_length=48)
        assert deserialize(serialize(ct), u_length=48) == ct


class TestHexFields:
    """Tests for the per-field hex encoding."""

    def test_format(self):
        ct = Ciphertext(b"\xab" * 96, b"\x01\x02", b"\xfe\xff")
        fields = to_hex_fields(ct)
        assert fields["U"] == "0x" + "ab" * 96
        assert fields["V"] == "0x0102"
        assert fields["W"] == "0xfeff"

    def test_symmetry(self, hello_ciphertext):
        assert from_hex_fields(to_hex_fields(hello_ciphertext)) == hello_ciphertext

    def test_lenient_parsing(self):
        ct = from_hex_fields({"U": "AB" * 96, "V": "0X0102", "W": "0xFEFF"})
        assert ct == Ciphertext(b"\xab" * 96, b"\x01\x02", b"\xfe\xff")

    def test_missing_field(self):
        with pytest.raises(MalformedCiphertext):
            from_hex_fields({"U": "0x00", "V": "0x00"})

    def test_bad_hex(self):
        with pytest.raises(MalformedCiphertext):
            from_hex_fields({"U": "0xzz", "V": "0x", "W": "0x"})
