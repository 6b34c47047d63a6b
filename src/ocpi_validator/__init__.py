"""OCPI Validator: schema and consistency checks for OCPI payloads.

Validates Location, Token, Session, CDR and Tariff JSON objects against the
Open Charge Point Interface data-exchange format. Each payload is decoded
into a typed model, then checked against value-range and cross-field rules.

    >>> from ocpi_validator import validate
    >>> result = validate(b'{"id": "LOC1"}', "location")
    >>> result.is_valid
    False
"""

__all__ = [
    "__version__",
    "validate",
    "ObjectType",
    "ErrorKind",
    "ValidationError",
    "ValidationResult",
]

__version__ = "0.1.0"

# Expose the validation entry points at package level, e.g.
# `from ocpi_validator import validate, ObjectType`
from .validation import ErrorKind, ObjectType, ValidationError, ValidationResult, validate  # noqa: E402
