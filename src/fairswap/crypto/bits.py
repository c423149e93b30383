"""
Bit codec for field elements, limbs and curve points.

Integers are decomposed least-significant bit first, matching the circuit's
``Num2Bits`` gadget. Byte packing for the SHA-256 message uses the opposite
order inside each byte (most significant bit first), which is how the SHA-256
gadget consumes its input bits.
"""

from typing import Iterable, List, Sequence, TYPE_CHECKING

from ..constants import LIMB_BITS
from ..errors import ValidationError

if TYPE_CHECKING:
    from ..zkp.inputs import CurvePoint


def to_bits(value: int, width: int) -> List[int]:
    """Decompose ``value`` into ``width`` bits, LSB first."""
    if width <= 0:
        raise ValidationError("Bit width must be positive", field="width", value=width)
    if value < 0 or value >> width:
        raise ValidationError(
            f"Value does not fit in {width} bits",
            field="value",
            value=value,
            expected=f"0 <= value < 2^{width}",
        )
    return [(value >> i) & 1 for i in range(width)]


def from_bits(bits: Sequence[int]) -> int:
    """Recompose an LSB-first bit sequence into an integer."""
    value = 0
    for i, bit in enumerate(bits):
        if bit not in (0, 1):
            raise ValidationError("Bit sequence must be binary", field=f"bits[{i}]", value=bit)
        value |= bit << i
    return value


def limbs_to_bits(limbs: Sequence[int], limb_bits: int = LIMB_BITS) -> List[int]:
    """Serialize limbs in order, each limb LSB first."""
    bits: List[int] = []
    for limb in limbs:
        bits.extend(to_bits(limb, limb_bits))
    return bits


def point_to_bits(point: "CurvePoint") -> List[int]:
    """Serialize a curve point as x limbs followed by y limbs (512 bits)."""
    return limbs_to_bits(point.x) + limbs_to_bits(point.y)


def bits_to_bytes(bits: Sequence[int]) -> bytes:
    """Pack bits into bytes, most significant bit of each byte first."""
    if len(bits) % 8:
        raise ValidationError(
            "Bit length must be a multiple of 8",
            field="bits",
            value=len(bits),
        )
    out = bytearray(len(bits) // 8)
    for i, bit in enumerate(bits):
        if bit not in (0, 1):
            raise ValidationError("Bit sequence must be binary", field=f"bits[{i}]", value=bit)
        if bit:
            out[i // 8] |= 0x80 >> (i % 8)
    return bytes(out)


def bytes_to_bits(data: Iterable[int]) -> List[int]:
    """Unpack bytes into bits, most significant bit of each byte first."""
    return [(byte >> (7 - j)) & 1 for byte in data for j in range(8)]


def msb_bits_to_int(bits: Sequence[int]) -> int:
    """Recompose a bit sequence whose first entry is the most significant bit."""
    return from_bits(list(reversed(bits)))
