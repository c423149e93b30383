"""
fairswap: constraint logic for zero-knowledge fair exchange of hash collisions.

The circuit is modelled as a deterministic evaluator: every signal is
computed once from the inputs and every constraint is collected into one
conjunction.
"""

from .errors import (
    FairSwapError,
    UnsatisfiedConstraintError,
    ValidationError,
    WitnessSanityError,
)
from .zkp import (
    CircuitConfig,
    CircuitStatus,
    CurvePoint,
    EvaluationResult,
    FairExchangeCircuit,
    FairExchangeInputs,
    compute_public_commitment,
)

__version__ = "0.1.0"

__all__ = [
    "FairExchangeCircuit",
    "FairExchangeInputs",
    "CurvePoint",
    "CircuitConfig",
    "CircuitStatus",
    "EvaluationResult",
    "compute_public_commitment",
    "FairSwapError",
    "ValidationError",
    "UnsatisfiedConstraintError",
    "WitnessSanityError",
]
