"""
Hash-collision checker.

Enforces ``H16(preimage0) == H16(preimage1)``. Distinctness of the two
preimages is only asserted while the witness is built; no constraint forbids
``preimage0 == preimage1``, so a verifier accepts a self-collision.
"""

import logging
from typing import Callable, Optional, Sequence

from ..crypto.poseidon import poseidon_hash
from .circuits import CircuitComponent, ConstraintSystem, ConstraintType, Witness

logger = logging.getLogger(__name__)

PreimageHasher = Callable[[Sequence[int]], int]


class CollisionChecker(CircuitComponent):
    """Checks that two 16-element preimages collide under ``hasher``."""

    name = "collision"

    def __init__(self, hasher: Optional[PreimageHasher] = None):
        self.hasher = hasher or poseidon_hash

    def synthesize(
        self,
        cs: ConstraintSystem,
        witness: Witness,
        preimage0: Sequence[int],
        preimage1: Sequence[int],
    ) -> None:
        difference = 0
        for a, b in zip(preimage0, preimage1):
            difference |= a ^ b
        witness.set_value(self.signal("difference"), difference)
        cs.assert_nonzero_sanity(
            self.signal("distinct"),
            self.name,
            difference,
            description="preimage0 and preimage1 differ (prover-side only)",
        )

        hash0 = witness.set_value(self.signal("hash0"), self.hasher(preimage0))
        hash1 = witness.set_value(self.signal("hash1"), self.hasher(preimage1))
        cs.assert_equal(
            self.signal("hash0==hash1"),
            self.name,
            hash0,
            hash1,
            constraint_type=ConstraintType.HASH,
            description="H16(preimage0) equals H16(preimage1)",
        )
        logger.debug("Collision check: hash0=%s hash1=%s", hash0, hash1)
