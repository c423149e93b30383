"""
SHA-256 over bit streams.

The transcript binder hashes a bit string, not a byte string; this module is
the bridge between the two views.
"""

import hashlib
import logging
from typing import List, Sequence

from .bits import bits_to_bytes, bytes_to_bits

logger = logging.getLogger(__name__)


def sha256_bits(bits: Sequence[int]) -> List[int]:
    """
    Hash a bit message with SHA-256.

    Args:
        bits: Message bits, first bit is the most significant bit of the first byte.
              The length must be a multiple of 8.

    Returns:
        The 256 digest bits in the same order.
    """
    message = bits_to_bytes(bits)
    digest = hashlib.sha256(message).digest()
    logger.debug("sha256 over %d bits -> %s", len(bits), digest.hex())
    return bytes_to_bits(digest)
