"""Validation data models.

This module defines the core data structures for validation outcomes:
- ErrorKind: The closed taxonomy of payload problems
- ValidationError: One path-qualified problem with a fixed message template
- ValidationResult: Outcome of validating a single payload
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class ErrorKind(str, Enum):
    """Kinds of payload problems the engine can report."""

    INVALID_JSON = "invalid_json"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FIELD_TYPE = "invalid_field_type"
    INVALID_VALUE = "invalid_value"
    NOT_IMPLEMENTED = "not_implemented"


@dataclass(frozen=True)
class ValidationError:
    """A single validation problem.

    Attributes:
        kind: Error category.
        field: Dotted/indexed path of the offending field
            (e.g. ``evses[0].connectors[1].max_voltage``); None for
            ``INVALID_JSON`` and ``NOT_IMPLEMENTED``.
        detail: Expected shape for ``INVALID_FIELD_TYPE``, reason for
            ``INVALID_VALUE``; None otherwise.

    Examples:
        >>> ValidationError.missing_required_field("address").message
        'Missing required field: address'
        >>> ValidationError.invalid_value("coordinates.latitude", "Must be between -90 and 90").message
        'Invalid value for field coordinates.latitude: Must be between -90 and 90'
    """

    kind: ErrorKind
    field: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def invalid_json(cls) -> "ValidationError":
        return cls(ErrorKind.INVALID_JSON)

    @classmethod
    def missing_required_field(cls, field: str) -> "ValidationError":
        return cls(ErrorKind.MISSING_REQUIRED_FIELD, field)

    @classmethod
    def invalid_field_type(cls, field: str, expected: str) -> "ValidationError":
        return cls(ErrorKind.INVALID_FIELD_TYPE, field, expected)

    @classmethod
    def invalid_value(cls, field: str, reason: str) -> "ValidationError":
        return cls(ErrorKind.INVALID_VALUE, field, reason)

    @classmethod
    def not_implemented(cls) -> "ValidationError":
        return cls(ErrorKind.NOT_IMPLEMENTED)

    @property
    def message(self) -> str:
        """Human-readable message rendered from the kind's template."""
        if self.kind == ErrorKind.INVALID_JSON:
            return "Invalid JSON format"
        if self.kind == ErrorKind.MISSING_REQUIRED_FIELD:
            return f"Missing required field: {self.field}"
        if self.kind == ErrorKind.INVALID_FIELD_TYPE:
            return f"Invalid type for field {self.field}: expected {self.detail}"
        if self.kind == ErrorKind.INVALID_VALUE:
            return f"Invalid value for field {self.field}: {self.detail}"
        return "This validation is not implemented yet"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "field": self.field,
            "detail": self.detail,
            "message": self.message,
        }

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one payload.

    Attributes:
        is_valid: True when no errors were found.
        errors: Errors in the order they were detected.

    Examples:
        >>> ValidationResult.from_errors([]).is_valid
        True
        >>> ValidationResult(is_valid=True, errors=(ValidationError.invalid_json(),))
        Traceback (most recent call last):
        ...
        ValueError: is_valid=True requires no errors
    """

    is_valid: bool
    errors: Tuple[ValidationError, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))
        if self.is_valid and self.errors:
            raise ValueError("is_valid=True requires no errors")
        if not self.is_valid and not self.errors:
            raise ValueError("is_valid=False requires at least one error")

    @classmethod
    def from_errors(cls, errors: Iterable[ValidationError]) -> "ValidationResult":
        collected = tuple(errors)
        return cls(is_valid=not collected, errors=collected)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


__all__ = ["ErrorKind", "ValidationError", "ValidationResult"]
