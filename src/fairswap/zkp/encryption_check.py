"""
Encryption verifier.

Derives the symmetric key from the shared point's x-coordinate and checks
that ``ew`` is the Poseidon encryption of ``preimage0 || preimage1`` under
that key and the nonce, including the primitive's own success flag.
"""

import logging
from typing import List, Sequence, Tuple

from ..constants import CIPHERTEXT_LENGTH, LIMB_BITS
from ..crypto.encryption import poseidon_decrypt, poseidon_encrypt
from ..errors import CryptographicError
from .circuits import CircuitComponent, ConstraintSystem, ConstraintType, Witness
from .inputs import CurvePoint, Limbs

logger = logging.getLogger(__name__)


def derive_encryption_key(x: Limbs) -> Tuple[int, int]:
    """Pack the four x-coordinate limbs into two 128-bit key words."""
    return x[0] + (x[1] << LIMB_BITS), x[2] + (x[3] << LIMB_BITS)


class EncryptionVerifier(CircuitComponent):
    """Enforces ``Encrypt(key(Qs.x), nonce, message) == ew`` and ``ok == 1``."""

    name = "encryption"

    def synthesize(
        self,
        cs: ConstraintSystem,
        witness: Witness,
        qs: CurvePoint,
        nonce: int,
        message: Sequence[int],
        ew: Sequence[int],
    ) -> None:
        key = derive_encryption_key(qs.x)
        witness.set_value(self.signal("key[0]"), key[0])
        witness.set_value(self.signal("key[1]"), key[1])

        try:
            expected: List[int] = poseidon_encrypt(message, key, nonce)
        except CryptographicError as e:
            logger.warning("Encryption failed closed: %s", e.message)
            expected = [0] * CIPHERTEXT_LENGTH

        for i, (computed, given) in enumerate(zip(expected, ew)):
            witness.set_value(self.signal(f"ciphertext[{i}]"), computed)
            cs.assert_equal(
                self.signal(f"ciphertext[{i}]"),
                self.name,
                given,
                computed,
                constraint_type=ConstraintType.ENCRYPTION,
                description=f"ew[{i}] matches the recomputed ciphertext",
            )

        _, ok = poseidon_decrypt(ew, key, nonce, len(message))
        witness.set_value(self.signal("ok"), ok)
        cs.assert_equal(
            self.signal("ok"),
            self.name,
            ok,
            1,
            constraint_type=ConstraintType.ENCRYPTION,
            description="encryption primitive reports success",
        )
