"""
Constraint system, witness and circuit abstractions.

A circuit here is a flat conjunction of checks collected while every signal
is computed once, in dependency order. Checks come in two strengths:
verifier-enforced constraints, which make up the provable statement, and
prover-only witness sanity assertions, which can abort witness construction
but are invisible to a verifier.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from ..constants import FIELD_MODULUS
from ..errors import WitnessError

logger = logging.getLogger(__name__)


class EnforcementLevel(Enum):
    """Who checks a predicate."""

    CONSTRAINT = "constraint"
    WITNESS_SANITY = "witness_sanity"


class ConstraintType(Enum):
    """Types of checks in the fair-exchange circuit."""

    EQUALITY = "equality"
    ZERO = "zero"
    HASH = "hash"
    SCALAR_MUL = "scalar_mul"
    ENCRYPTION = "encryption"
    BINDING = "binding"
    DISTINCTNESS = "distinctness"


@dataclass
class ConstraintCheck:
    """One evaluated check: ``actual`` must equal ``expected``."""

    constraint_id: str
    component: str
    constraint_type: ConstraintType
    level: EnforcementLevel
    expected: int
    actual: int
    description: str = ""

    def __post_init__(self):
        if not self.constraint_id:
            raise ValueError("constraint_id cannot be empty")

    @property
    def satisfied(self) -> bool:
        return self.actual == self.expected

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.constraint_id,
            "component": self.component,
            "type": self.constraint_type.value,
            "level": self.level.value,
            "expected": str(self.expected),
            "actual": str(self.actual),
            "satisfied": self.satisfied,
            "description": self.description,
        }


class ConstraintSystem:
    """Collects every check raised while evaluating a circuit."""

    def __init__(self, modulus: int = FIELD_MODULUS):
        self.modulus = modulus
        self.checks: List[ConstraintCheck] = []
        self._ids: Set[str] = set()

    def _record(self, check: ConstraintCheck) -> ConstraintCheck:
        if check.constraint_id in self._ids:
            raise WitnessError(
                f"Constraint {check.constraint_id} recorded twice",
                signal=check.constraint_id,
            )
        self._ids.add(check.constraint_id)
        self.checks.append(check)
        if not check.satisfied:
            logger.debug(
                "%s check %s failed: expected %s, got %s",
                check.level.value,
                check.constraint_id,
                check.expected,
                check.actual,
            )
        return check

    def assert_equal(
        self,
        constraint_id: str,
        component: str,
        actual: int,
        expected: int,
        constraint_type: ConstraintType = ConstraintType.EQUALITY,
        description: str = "",
    ) -> ConstraintCheck:
        """Record the constraint ``actual == expected`` over the field."""
        return self._record(
            ConstraintCheck(
                constraint_id=constraint_id,
                component=component,
                constraint_type=constraint_type,
                level=EnforcementLevel.CONSTRAINT,
                expected=expected % self.modulus,
                actual=actual % self.modulus,
                description=description,
            )
        )

    def assert_zero(
        self,
        constraint_id: str,
        component: str,
        value: int,
        constraint_type: ConstraintType = ConstraintType.ZERO,
        description: str = "",
    ) -> ConstraintCheck:
        """Record the constraint ``value == 0``."""
        return self.assert_equal(
            constraint_id, component, value, 0, constraint_type, description
        )

    def assert_nonzero_sanity(
        self,
        constraint_id: str,
        component: str,
        value: int,
        constraint_type: ConstraintType = ConstraintType.DISTINCTNESS,
        description: str = "",
    ) -> ConstraintCheck:
        """Record a prover-only assertion that ``value`` is non-zero."""
        return self._record(
            ConstraintCheck(
                constraint_id=constraint_id,
                component=component,
                constraint_type=constraint_type,
                level=EnforcementLevel.WITNESS_SANITY,
                expected=1,
                actual=int(value != 0),
                description=description,
            )
        )

    @property
    def constraints(self) -> List[ConstraintCheck]:
        return [c for c in self.checks if c.level == EnforcementLevel.CONSTRAINT]

    @property
    def sanity_checks(self) -> List[ConstraintCheck]:
        return [c for c in self.checks if c.level == EnforcementLevel.WITNESS_SANITY]

    def failed_constraints(self) -> List[ConstraintCheck]:
        return [c for c in self.constraints if not c.satisfied]

    def failed_sanity_checks(self) -> List[ConstraintCheck]:
        return [c for c in self.sanity_checks if not c.satisfied]

    def is_satisfied(self) -> bool:
        """True when every verifier-enforced constraint holds."""
        return all(c.satisfied for c in self.constraints)

    def get_constraint_count(self) -> int:
        return len(self.constraints)

    def get_sanity_count(self) -> int:
        return len(self.sanity_checks)


@dataclass
class Witness:
    """Single-assignment map of named signals to field values."""

    values: Dict[str, int] = field(default_factory=dict)
    public_signals: List[str] = field(default_factory=list)

    def set_value(self, signal: str, value: int, is_public: bool = False) -> int:
        """Assign ``signal``; every signal is written exactly once."""
        if signal in self.values:
            raise WitnessError(f"Signal {signal} assigned twice", signal=signal)
        self.values[signal] = value
        if is_public:
            self.public_signals.append(signal)
        return value

    def get_value(self, signal: str) -> Optional[int]:
        return self.values.get(signal)

    def __contains__(self, signal: str) -> bool:
        return signal in self.values

    def __len__(self) -> int:
        return len(self.values)

    @property
    def public_values(self) -> Dict[str, int]:
        return {name: self.values[name] for name in self.public_signals}

    @property
    def private_values(self) -> Dict[str, int]:
        public = set(self.public_signals)
        return {k: v for k, v in self.values.items() if k not in public}

    def to_bytes(self) -> bytes:
        """Serialize witness to bytes."""
        data = {
            "values": {k: str(v) for k, v in self.values.items()},
            "public_signals": self.public_signals,
        }
        return json.dumps(data, sort_keys=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Witness":
        """Deserialize witness from bytes."""
        parsed = json.loads(data.decode("utf-8"))
        return cls(
            values={k: int(v) for k, v in parsed["values"].items()},
            public_signals=list(parsed["public_signals"]),
        )


@dataclass
class PublicInputs:
    """Named public input vector exposed to a verifier."""

    inputs: List[int] = field(default_factory=list)
    input_names: List[str] = field(default_factory=list)

    def add_input(self, name: str, value: int) -> None:
        self.inputs.append(value)
        self.input_names.append(name)

    def get_input(self, name: str) -> Optional[int]:
        try:
            index = self.input_names.index(name)
            return self.inputs[index]
        except ValueError:
            return None

    def to_bytes(self) -> bytes:
        data = {
            "inputs": [str(v) for v in self.inputs],
            "input_names": self.input_names,
        }
        return json.dumps(data, sort_keys=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicInputs":
        parsed = json.loads(data.decode("utf-8"))
        return cls(
            inputs=[int(v) for v in parsed["inputs"]],
            input_names=parsed["input_names"],
        )


class CircuitComponent(ABC):
    """A sub-circuit contributing checks and signals to a shared system."""

    name: str = "component"

    def signal(self, local_name: str) -> str:
        """Fully-qualified signal name for this component."""
        return f"{self.name}.{local_name}"

    @abstractmethod
    def synthesize(self, cs: ConstraintSystem, witness: Witness, *args, **kwargs) -> None:
        """Compute this component's signals and record its checks."""
        pass


class ZKCircuit(ABC):
    """Abstract base class for circuits over a fixed input schema."""

    def __init__(self, circuit_id: str):
        if not circuit_id:
            raise ValueError("circuit_id cannot be empty")
        self.circuit_id = circuit_id

    @abstractmethod
    def evaluate(self, inputs: Any) -> Any:
        """Evaluate every check for the given inputs."""
        pass

    @abstractmethod
    def generate_witness(self, inputs: Any) -> Witness:
        """Build the full witness, raising if any check fails."""
        pass

    @abstractmethod
    def verify(self, inputs: Any, public_inputs: Optional[PublicInputs] = None) -> bool:
        """Verifier predicate: all enforced constraints hold."""
        pass

    @abstractmethod
    def get_circuit_info(self) -> Dict[str, Any]:
        """Get information about the circuit."""
        pass
