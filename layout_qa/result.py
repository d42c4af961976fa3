"""Tagged results and the failure taxonomy shared by all components."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class FailureKind(Enum):
    """Why a component could not produce a value."""
    DECODE_FAILURE = "decode_failure"
    EMPTY_INPUT = "empty_input"
    PROCESSING_FAILURE = "processing_failure"


class LayoutQAError(Exception):
    """Base class for failures raised inside a processing stage."""
    kind = FailureKind.PROCESSING_FAILURE


class DecodeFailure(LayoutQAError):
    """Image cannot be read or decoded."""
    kind = FailureKind.DECODE_FAILURE


class EmptyInput(LayoutQAError):
    """Zero-size image, empty region list, or empty path."""
    kind = FailureKind.EMPTY_INPUT


class ProcessingFailure(LayoutQAError):
    """Unexpected failure inside a pipeline stage."""
    kind = FailureKind.PROCESSING_FAILURE


@dataclass(frozen=True)
class Outcome:
    """Result of a public component operation.

    A successful outcome always carries a value, even when that value is an
    empty collection, so "nothing detected" and "unavailable" stay distinct.
    """
    value: Any = None
    failure: Optional[FailureKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: Any) -> 'Outcome':
        return cls(value=value)

    @classmethod
    def from_failure(cls, kind: FailureKind, message: str = "") -> 'Outcome':
        return cls(failure=kind, message=message)

    @classmethod
    def from_exception(cls, error: Exception) -> 'Outcome':
        """Map a stage exception onto the failure taxonomy."""
        kind = getattr(error, 'kind', FailureKind.PROCESSING_FAILURE)
        if not isinstance(kind, FailureKind):
            kind = FailureKind.PROCESSING_FAILURE
        return cls(failure=kind, message=str(error) or type(error).__name__)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap_or(self, default: Any) -> Any:
        return self.value if self.ok else default

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        value = self.value
        if hasattr(value, 'to_dict'):
            value = value.to_dict()
        elif isinstance(value, (list, tuple)):
            value = [v.to_dict() if hasattr(v, 'to_dict') else v for v in value]
        return {
            'ok': self.ok,
            'failure': self.failure.value if self.failure else None,
            'message': self.message,
            'value': value if self.ok else None,
        }
