"""fairswap error handling.

Structured exceptions shared by the cryptographic collaborators and the
constraint evaluator.
"""

from .exceptions import (
    ConfigurationError,
    CryptographicError,
    CurveError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    FairSwapError,
    UnsatisfiedConstraintError,
    ValidationError,
    WitnessError,
    WitnessSanityError,
    create_validation_error,
)

__all__ = [
    "FairSwapError",
    "ValidationError",
    "CryptographicError",
    "CurveError",
    "ConfigurationError",
    "WitnessError",
    "UnsatisfiedConstraintError",
    "WitnessSanityError",
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorContext",
    "create_validation_error",
]
