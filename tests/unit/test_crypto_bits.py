"""
Unit tests for the bit codec.
"""

import hashlib

import pytest

from fairswap.crypto.bits import (
    bits_to_bytes,
    bytes_to_bits,
    from_bits,
    limbs_to_bits,
    msb_bits_to_int,
    point_to_bits,
    to_bits,
)
from fairswap.crypto.hashing import sha256_bits
from fairswap.errors import ValidationError
from fairswap.zkp import CurvePoint


class TestToBits:
    """Test integer decomposition."""

    def test_lsb_first(self):
        """Bit 0 is the least significant bit."""
        assert to_bits(6, 4) == [0, 1, 1, 0]

    def test_full_width(self):
        """The maximum value fills every bit."""
        assert to_bits(2**64 - 1, 64) == [1] * 64

    def test_value_too_wide(self):
        """Values outside the declared width are rejected."""
        with pytest.raises(ValidationError):
            to_bits(16, 4)

    def test_negative_value(self):
        """Negative values are rejected."""
        with pytest.raises(ValidationError):
            to_bits(-1, 8)

    def test_from_bits_inverse(self):
        """from_bits undoes to_bits on the declared width."""
        value = 0xDEADBEEFCAFEBABE
        assert from_bits(to_bits(value, 64)) == value

    def test_from_bits_rejects_non_binary(self):
        """Non-binary entries are rejected."""
        with pytest.raises(ValidationError):
            from_bits([0, 2, 1])


class TestPointBits:
    """Test point serialization."""

    def test_point_width(self):
        """A point serializes to 512 bits."""
        point = CurvePoint.from_ints(3, 5)
        assert len(point_to_bits(point)) == 512

    def test_point_order(self):
        """x limbs come first, then y limbs, each limb LSB first."""
        point = CurvePoint((1, 0, 0, 0), (0, 0, 0, 2**63))
        bits = point_to_bits(point)
        assert bits[0] == 1
        assert sum(bits[:256]) == 1
        assert bits[511] == 1
        assert sum(bits[256:]) == 1

    def test_limbs_match_integer_decomposition(self):
        """Little-endian limbs serialize like the 256-bit integer."""
        value = (1 << 200) + (1 << 70) + 9
        point = CurvePoint.from_ints(value, 0)
        assert limbs_to_bits(point.x) == to_bits(value, 256)


class TestBytePacking:
    """Test SHA-256 message packing."""

    def test_msb_first_within_byte(self):
        """The first bit is the most significant bit of the first byte."""
        assert bits_to_bytes([1, 0, 0, 0, 0, 0, 0, 1]) == b"\x81"
        assert bytes_to_bits(b"\x80") == [1, 0, 0, 0, 0, 0, 0, 0]

    def test_length_must_be_byte_aligned(self):
        """Bit strings that are not whole bytes are rejected."""
        with pytest.raises(ValidationError):
            bits_to_bytes([1, 0, 1])

    def test_msb_bits_to_int(self):
        """First bit is the most significant."""
        assert msb_bits_to_int([1, 0, 0]) == 4

    def test_sha256_bits_matches_hashlib(self):
        """Bit-level SHA-256 agrees with hashlib on byte-aligned input."""
        data = b"fair exchange"
        digest_bits = sha256_bits(bytes_to_bits(data))
        assert len(digest_bits) == 256
        assert bits_to_bytes(digest_bits) == hashlib.sha256(data).digest()
