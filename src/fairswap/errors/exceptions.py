"""Exception hierarchy for fairswap.

This module defines the structured errors raised by the fair-exchange
circuit evaluator and its cryptographic collaborators. An unsatisfiable
witness is not an error for ``evaluate``/``verify`` (they return a Boolean
outcome); only witness generation turns it into an exception.
"""

import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from ..zkp.circuits import ConstraintCheck


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""

    VALIDATION = "validation"
    CRYPTOGRAPHIC = "cryptographic"
    CONFIGURATION = "configuration"
    WITNESS = "witness"
    CONSTRAINT = "constraint"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for an error."""

    timestamp: float = field(default_factory=time.time)
    component: Optional[str] = None
    operation: Optional[str] = None
    signal: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary."""
        return {
            "timestamp": self.timestamp,
            "component": self.component,
            "operation": self.operation,
            "signal": self.signal,
            "metadata": self.metadata,
        }


class FairSwapError(Exception):
    """Base exception for all fairswap errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context or ErrorContext()
        self.cause = cause
        self.metadata = metadata or {}
        self.timestamp = time.time()
        self.traceback = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.severity != ErrorSeverity.MEDIUM:
            parts.append(f"Severity: {self.severity.value}")

        if self.category != ErrorCategory.SYSTEM:
            parts.append(f"Category: {self.category.value}")

        return " | ".join(parts)


class ValidationError(FairSwapError):
    """Malformed input: wrong shape, out-of-range limb or field value."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        expected: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.VALIDATION, **kwargs)
        self.field = field
        self.value = value
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        """Convert validation error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "field": self.field,
                "value": str(self.value) if self.value is not None else None,
                "expected": str(self.expected) if self.expected is not None else None,
            }
        )
        return data


class CryptographicError(FairSwapError):
    """Cryptographic primitive refused its input."""

    def __init__(
        self,
        message: str,
        algorithm: Optional[str] = None,
        **kwargs,
    ):
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message, category=ErrorCategory.CRYPTOGRAPHIC, **kwargs)
        self.algorithm = algorithm

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"algorithm": self.algorithm})
        return data


class CurveError(CryptographicError):
    """Elliptic-curve operation failed closed (invalid point, zero scalar, infinity)."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, algorithm="secp256k1", **kwargs)


class ConfigurationError(FairSwapError):
    """Configuration error."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.config_key = config_key
        self.config_value = config_value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration error to dictionary."""
        data = super().to_dict()
        data.update(
            {
                "config_key": self.config_key,
                "config_value": str(self.config_value)
                if self.config_value is not None
                else None,
            }
        )
        return data


class WitnessError(FairSwapError):
    """Witness bookkeeping error, e.g. a signal assigned twice."""

    def __init__(self, message: str, signal: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.WITNESS, **kwargs)
        self.signal = signal
        self.context.signal = signal


class UnsatisfiedConstraintError(FairSwapError):
    """At least one verifier-enforced constraint does not hold."""

    def __init__(self, message: str, failures: Optional[List["ConstraintCheck"]] = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CONSTRAINT,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.failures = list(failures or [])

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["failures"] = [check.to_dict() for check in self.failures]
        return data


class WitnessSanityError(FairSwapError):
    """A prover-side-only assertion failed while building the witness."""

    def __init__(self, message: str, failures: Optional[List["ConstraintCheck"]] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.WITNESS, **kwargs)
        self.failures = list(failures or [])

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["failures"] = [check.to_dict() for check in self.failures]
        return data


def create_validation_error(
    field: str, value: Any, expected: Any, message: Optional[str] = None
) -> ValidationError:
    """Create a validation error."""
    if message is None:
        message = f"Invalid value for field '{field}': expected {expected}, got {value}"

    return ValidationError(message=message, field=field, value=value, expected=expected)
