"""
Key-agreement verifier.

Checks that one private scalar ``db`` explains both the seller's public key
(``db * G == Qb``) and the shared secret (``db * Qa == Qs``). Each comparison
is expressed limb by limb as a difference signal constrained to zero.
"""

import logging
from typing import Tuple

from ..constants import LIMB_COUNT
from ..crypto.curve import GENERATOR, scalar_mul
from ..errors import CurveError
from .circuits import CircuitComponent, ConstraintSystem, ConstraintType, Witness
from .inputs import CurvePoint, Limbs, limbs_to_int

logger = logging.getLogger(__name__)

_UNASSIGNED: Limbs = (0,) * LIMB_COUNT


class KeyAgreementVerifier(CircuitComponent):
    """Enforces ``db * Qa == Qs`` and ``db * G == Qb``."""

    name = "key_agreement"

    def synthesize(
        self,
        cs: ConstraintSystem,
        witness: Witness,
        db: Limbs,
        qa: CurvePoint,
        qb: CurvePoint,
        qs: CurvePoint,
    ) -> None:
        scalar = limbs_to_int(db)
        self._check_product(cs, witness, "shared", scalar, qa.to_affine(), qs)
        self._check_product(cs, witness, "public", scalar, GENERATOR, qb)

    def _check_product(
        self,
        cs: ConstraintSystem,
        witness: Witness,
        label: str,
        scalar: int,
        base: Tuple[int, int],
        claimed: CurvePoint,
    ) -> None:
        try:
            computed = CurvePoint.from_affine(scalar_mul(scalar, base))
            valid = 1
        except CurveError as e:
            logger.warning("Scalar multiplication for %s point failed closed: %s", label, e.message)
            computed = CurvePoint(_UNASSIGNED, _UNASSIGNED)
            valid = 0

        witness.set_value(self.signal(f"{label}.valid"), valid)
        cs.assert_equal(
            self.signal(f"{label}.valid"),
            self.name,
            valid,
            1,
            constraint_type=ConstraintType.SCALAR_MUL,
            description=f"scalar multiplication for the {label} point is defined",
        )

        for coord in ("x", "y"):
            for i, (got, want) in enumerate(zip(getattr(computed, coord), getattr(claimed, coord))):
                diff_signal = self.signal(f"{label}.diff.{coord}[{i}]")
                diff = witness.set_value(diff_signal, (got - want) % cs.modulus)
                cs.assert_zero(
                    diff_signal,
                    self.name,
                    diff,
                    description=f"{label} point {coord} limb {i} matches",
                )
