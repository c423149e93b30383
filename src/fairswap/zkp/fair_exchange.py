"""
Fair-exchange circuit.

Composes the four checkers over one shared set of input signals:

- CollisionChecker: ``H16(preimage0) == H16(preimage1)`` (distinctness is
  prover-side only)
- KeyAgreementVerifier: ``db * Qa == Qs`` and ``db * G == Qb``
- EncryptionVerifier: ``Encrypt(key(Qs.x), nonce, preimage0 || preimage1) == ew``
- PublicInputBinder: ``SHA256(Qa || Qb || nonce || ew) == Hpub``

The instance is satisfied exactly when every enforced constraint of every
component holds. All components are always evaluated; there is no early exit.
"""

import logging
import time
from typing import Any, Dict, Optional, Union

from ..constants import (
    CIPHERTEXT_ELEMENT_BITS,
    CIPHERTEXT_LENGTH,
    DIGEST_HALF_BITS,
    LIMB_BITS,
    NONCE_BITS,
    POINT_BITS,
    PREIMAGE_LENGTH,
    TRANSCRIPT_BITS,
)
from ..errors import (
    UnsatisfiedConstraintError,
    ValidationError,
    WitnessSanityError,
)
from .binder import PublicInputBinder
from .circuits import (
    ConstraintSystem,
    ConstraintType,
    PublicInputs,
    Witness,
    ZKCircuit,
)
from .collision import CollisionChecker, PreimageHasher
from .core import CircuitConfig, CircuitStatus, EvaluationResult
from .encryption_check import EncryptionVerifier
from .inputs import FairExchangeInputs
from .key_agreement import KeyAgreementVerifier

logger = logging.getLogger(__name__)

InputsLike = Union[FairExchangeInputs, Dict[str, Any]]


class FairExchangeCircuit(ZKCircuit):
    """Main circuit of the zero-knowledge fair exchange."""

    def __init__(
        self,
        config: Optional[CircuitConfig] = None,
        preimage_hasher: Optional[PreimageHasher] = None,
        circuit_id: str = "fair_exchange",
    ):
        super().__init__(circuit_id)
        self.config = config or CircuitConfig()
        self.config.validate()
        self.collision = CollisionChecker(preimage_hasher)
        self.key_agreement = KeyAgreementVerifier()
        self.encryption = EncryptionVerifier()
        self.binder = PublicInputBinder()

    @property
    def components(self):
        return [self.collision, self.key_agreement, self.encryption, self.binder]

    def _assign_inputs(self, witness: Witness, inputs: FairExchangeInputs) -> None:
        for i, value in enumerate(inputs.preimage0):
            witness.set_value(f"preimage0[{i}]", value)
        for i, value in enumerate(inputs.preimage1):
            witness.set_value(f"preimage1[{i}]", value)
        for i, value in enumerate(inputs.db):
            witness.set_value(f"db[{i}]", value)
        for name, point in (("Qs", inputs.qs), ("Qa", inputs.qa), ("Qb", inputs.qb)):
            for coord in ("x", "y"):
                for i, value in enumerate(getattr(point, coord)):
                    witness.set_value(f"{name}.{coord}[{i}]", value)
        witness.set_value("nonce", inputs.nonce)
        for i, value in enumerate(inputs.ew):
            witness.set_value(f"ew[{i}]", value)
        for name, value in zip(self.config.public_input_names, inputs.hpub):
            witness.set_value(name, value, is_public=True)

    def _bind_public_inputs(
        self, cs: ConstraintSystem, inputs: FairExchangeInputs, public_inputs: PublicInputs
    ) -> None:
        for name, value in zip(self.config.public_input_names, inputs.hpub):
            supplied = public_inputs.get_input(name)
            if supplied is None:
                raise ValidationError(f"Public input {name} not supplied", field=name)
            cs.assert_equal(
                f"public.{name}",
                "public",
                value,
                supplied,
                constraint_type=ConstraintType.BINDING,
                description=f"witness {name} equals the verifier's public input",
            )

    def _coerce(self, inputs: InputsLike) -> FairExchangeInputs:
        if isinstance(inputs, FairExchangeInputs):
            return inputs
        if isinstance(inputs, dict):
            return FairExchangeInputs.from_dict(inputs)
        raise ValidationError(
            "Inputs must be FairExchangeInputs or a dict",
            field="inputs",
            value=type(inputs).__name__,
        )

    def evaluate(
        self, inputs: InputsLike, public_inputs: Optional[PublicInputs] = None
    ) -> EvaluationResult:
        """
        Evaluate every check of one instance.

        Never raises for an unsatisfiable instance; malformed inputs produce
        an ``INVALID_INPUT`` result.

        Args:
            inputs: Full signal assignment.
            public_inputs: Optional verifier-side public vector; when given,
                it must match the Hpub carried by ``inputs``.
        """
        start_time = time.time()
        try:
            parsed = self._coerce(inputs)
        except ValidationError as e:
            logger.warning("Rejected malformed circuit inputs: %s", e.message)
            return EvaluationResult(
                status=CircuitStatus.INVALID_INPUT,
                error_message=e.message,
                evaluation_time=time.time() - start_time,
            )

        cs = ConstraintSystem(self.config.field_modulus)
        witness = Witness()
        self._assign_inputs(witness, parsed)

        self.collision.synthesize(cs, witness, parsed.preimage0, parsed.preimage1)
        self.key_agreement.synthesize(cs, witness, parsed.db, parsed.qa, parsed.qb, parsed.qs)
        self.encryption.synthesize(cs, witness, parsed.qs, parsed.nonce, parsed.message, parsed.ew)
        self.binder.synthesize(cs, witness, parsed.qa, parsed.qb, parsed.nonce, parsed.ew, parsed.hpub)
        if public_inputs is not None:
            try:
                self._bind_public_inputs(cs, parsed, public_inputs)
            except ValidationError as e:
                return EvaluationResult(
                    status=CircuitStatus.INVALID_INPUT,
                    checks=cs.checks,
                    error_message=e.message,
                    evaluation_time=time.time() - start_time,
                )

        if not cs.is_satisfied():
            status = CircuitStatus.UNSATISFIED
        elif cs.failed_sanity_checks():
            status = CircuitStatus.SANITY_FAILED
        else:
            status = CircuitStatus.SATISFIED

        result = EvaluationResult(
            status=status,
            checks=cs.checks,
            witness=witness,
            evaluation_time=time.time() - start_time,
        )

        if self.config.log_failures:
            for check in result.failed_constraints:
                logger.warning("Constraint %s failed (%s)", check.constraint_id, check.description)
            for check in result.failed_sanity_checks:
                logger.warning(
                    "Witness sanity check %s failed (%s); not enforced by the verifier",
                    check.constraint_id,
                    check.description,
                )
        logger.info(
            "Circuit %s evaluated: %s (%d constraints, %.3fs)",
            self.circuit_id,
            status.name,
            cs.get_constraint_count(),
            result.evaluation_time,
        )
        return result

    def verify(self, inputs: InputsLike, public_inputs: Optional[PublicInputs] = None) -> bool:
        """Verifier predicate over enforced constraints only."""
        return self.evaluate(inputs, public_inputs).is_satisfied

    def generate_witness(self, inputs: InputsLike) -> Witness:
        """
        Build the full witness for an instance.

        Raises:
            ValidationError: if the inputs are malformed.
            WitnessSanityError: if a prover-side assertion fails and
                ``enforce_witness_sanity`` is set.
            UnsatisfiedConstraintError: if any enforced constraint fails.
        """
        result = self.evaluate(self._coerce(inputs))

        if self.config.enforce_witness_sanity and result.failed_sanity_checks:
            raise WitnessSanityError(
                "Witness sanity assertion failed: "
                + ", ".join(c.constraint_id for c in result.failed_sanity_checks),
                failures=result.failed_sanity_checks,
            )
        if not result.is_satisfied:
            raise UnsatisfiedConstraintError(
                "Witness does not satisfy components: " + ", ".join(result.failed_components()),
                failures=result.failed_constraints,
            )
        return result.witness

    def get_circuit_info(self) -> Dict[str, Any]:
        """Get information about the circuit."""
        return {
            "circuit_id": self.circuit_id,
            "components": [component.name for component in self.components],
            "public_inputs": list(self.config.public_input_names),
            "private_inputs": [
                f"preimage0[{PREIMAGE_LENGTH}]",
                f"preimage1[{PREIMAGE_LENGTH}]",
                "db[4]",
                "Qs[2][4]",
                "Qa[2][4]",
                "Qb[2][4]",
                "nonce",
                f"ew[{CIPHERTEXT_LENGTH}]",
            ],
            "constraint_counts": {
                "collision": 1,
                "key_agreement": 2 * (1 + POINT_BITS // LIMB_BITS),
                "encryption": CIPHERTEXT_LENGTH + 1,
                "binder": 2,
            },
            "sanity_checks": {"collision": 1},
            "transcript": {
                "Qa": POINT_BITS,
                "Qb": POINT_BITS,
                "nonce": NONCE_BITS,
                "ew": CIPHERTEXT_LENGTH * CIPHERTEXT_ELEMENT_BITS,
                "total": TRANSCRIPT_BITS,
                "digest_half": DIGEST_HALF_BITS,
            },
        }
