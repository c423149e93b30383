"""
secp256k1 group arithmetic.

Scalar multiplication is plain affine double-and-add over integer
coordinates. Curve membership and key generation go through the
``cryptography`` package. Every failure mode raises ``CurveError``: the
circuit has no encoding for the point at infinity or for off-curve points, so
such inputs fail closed.
"""

import logging
from typing import Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import ec

from ..constants import (
    SECP256K1_A,
    SECP256K1_GX,
    SECP256K1_GY,
    SECP256K1_N,
    SECP256K1_P,
)
from ..errors import CurveError

logger = logging.getLogger(__name__)

AffinePoint = Tuple[int, int]

GENERATOR: AffinePoint = (SECP256K1_GX, SECP256K1_GY)


def is_on_curve(point: AffinePoint) -> bool:
    """Check that ``point`` is a valid secp256k1 public point."""
    x, y = point
    if not (0 <= x < SECP256K1_P and 0 <= y < SECP256K1_P):
        return False
    try:
        ec.EllipticCurvePublicNumbers(x, y, ec.SECP256K1()).public_key()
    except ValueError:
        return False
    return True


def _add(p1: Optional[AffinePoint], p2: Optional[AffinePoint]) -> Optional[AffinePoint]:
    if p1 is None:
        return p2
    if p2 is None:
        return p1

    mod = SECP256K1_P
    x1, y1 = p1
    x2, y2 = p2

    if x1 == x2:
        if (y1 + y2) % mod == 0:
            return None
        slope = (3 * x1 * x1 + SECP256K1_A) * pow(2 * y1, -1, mod) % mod
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, mod) % mod

    x3 = (slope * slope - x1 - x2) % mod
    y3 = (slope * (x1 - x3) - y1) % mod
    return x3, y3


def point_add(p1: AffinePoint, p2: AffinePoint) -> AffinePoint:
    """Add two affine points; raises ``CurveError`` if the sum is the point at infinity."""
    result = _add(p1, p2)
    if result is None:
        raise CurveError("Point addition reached the point at infinity")
    return result


def scalar_mul(scalar: int, point: AffinePoint) -> AffinePoint:
    """
    Compute ``scalar * point`` by left-to-right double-and-add.

    Args:
        scalar: Non-negative integer; reduced modulo the group order.
        point: Affine point on secp256k1.

    Raises:
        CurveError: if the point is not on the curve or the scalar is
            congruent to zero modulo the group order.
    """
    if not is_on_curve(point):
        raise CurveError("Point is not on secp256k1", metadata={"point": point})

    k = scalar % SECP256K1_N
    if k == 0:
        raise CurveError("Scalar is zero modulo the group order")

    result: Optional[AffinePoint] = None
    for i in reversed(range(k.bit_length())):
        result = _add(result, result)
        if (k >> i) & 1:
            result = _add(result, point)

    if result is None:
        raise CurveError("Scalar multiplication reached the point at infinity")
    return result


def public_key_from_scalar(scalar: int) -> AffinePoint:
    """Derive ``scalar * G`` through the ``cryptography`` backend."""
    try:
        key = ec.derive_private_key(scalar, ec.SECP256K1())
    except (ValueError, TypeError) as e:
        raise CurveError(f"Invalid private scalar: {e}", cause=e)
    numbers = key.public_key().public_numbers()
    return numbers.x, numbers.y


def generate_keypair() -> Tuple[int, AffinePoint]:
    """Generate a random secp256k1 keypair as ``(scalar, public point)``."""
    key = ec.generate_private_key(ec.SECP256K1())
    numbers = key.private_numbers()
    public = numbers.public_numbers
    logger.debug("Generated secp256k1 keypair")
    return numbers.private_value, (public.x, public.y)
