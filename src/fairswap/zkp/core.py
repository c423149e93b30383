"""
Core circuit types: configuration, status codes and evaluation results.
"""

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from ..constants import FIELD_MODULUS
from ..errors import ConfigurationError
from .circuits import ConstraintCheck, EnforcementLevel, Witness
from .inputs import PUBLIC_INPUT_NAMES


class CircuitStatus(IntEnum):
    """Outcome of evaluating a circuit instance."""

    SATISFIED = 0
    UNSATISFIED = 1
    SANITY_FAILED = 2
    INVALID_INPUT = 3


@dataclass
class CircuitConfig:
    """Configuration for circuit evaluation."""

    field_modulus: int = FIELD_MODULUS

    # Abort witness generation when a prover-side assertion fails
    enforce_witness_sanity: bool = True

    # Log every failed check at warning level
    log_failures: bool = True

    public_input_names: Tuple[str, ...] = PUBLIC_INPUT_NAMES

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.field_modulus != FIELD_MODULUS:
            raise ConfigurationError(
                "Only the BN254 scalar field is supported",
                config_key="field_modulus",
                config_value=self.field_modulus,
            )
        if len(self.public_input_names) != len(PUBLIC_INPUT_NAMES):
            raise ConfigurationError(
                "Exactly two public input names are required",
                config_key="public_input_names",
                config_value=self.public_input_names,
            )
        if len(set(self.public_input_names)) != len(self.public_input_names):
            raise ConfigurationError(
                "Public input names must be unique",
                config_key="public_input_names",
                config_value=self.public_input_names,
            )


@dataclass
class EvaluationResult:
    """Result of evaluating every check of one instance."""

    status: CircuitStatus
    checks: List[ConstraintCheck] = field(default_factory=list)
    witness: Optional[Witness] = None
    error_message: Optional[str] = None
    evaluation_time: float = 0.0
    timestamp: float = field(default_factory=time.time)

    @property
    def is_satisfied(self) -> bool:
        """Verifier view: every enforced constraint holds."""
        return self.status in (CircuitStatus.SATISFIED, CircuitStatus.SANITY_FAILED)

    @property
    def failed_constraints(self) -> List[ConstraintCheck]:
        return [
            c for c in self.checks if c.level == EnforcementLevel.CONSTRAINT and not c.satisfied
        ]

    @property
    def failed_sanity_checks(self) -> List[ConstraintCheck]:
        return [
            c
            for c in self.checks
            if c.level == EnforcementLevel.WITNESS_SANITY and not c.satisfied
        ]

    def failed_components(self) -> List[str]:
        seen: List[str] = []
        for check in self.failed_constraints:
            if check.component not in seen:
                seen.append(check.component)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.name.lower(),
            "satisfied": self.is_satisfied,
            "constraint_count": sum(
                1 for c in self.checks if c.level == EnforcementLevel.CONSTRAINT
            ),
            "failed_constraints": [c.to_dict() for c in self.failed_constraints],
            "failed_sanity_checks": [c.to_dict() for c in self.failed_sanity_checks],
            "error_message": self.error_message,
            "evaluation_time": self.evaluation_time,
        }
