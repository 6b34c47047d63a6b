"""Validation system for OCPI payloads.

This module provides the validation engine for OCPI objects:

- **Models**: ErrorKind, ValidationError, ValidationResult - per-payload outcomes
- **Checks**: Per-object validators (see validation/checks/)
- **Rules**: Shared semantic rules and patterns (see validation/rules.py)
- **Config**: Tolerance constants and required-field profiles (import from .config)
- **Registry**: validate(), validate_files(), print_report() - dispatch and batch runs
- **Report**: PayloadResult, ValidationReport - batch aggregation and renderings

Public API:
    ValidationError: One path-qualified problem with a fixed message
    ValidationResult: Outcome of validating one payload
    ValidationReport: Aggregated results over many payloads
    validate: Validate one payload as a given object type
    validate_files: Validate a batch of files
    print_report: Display batch results to console

Usage:
    >>> from ocpi_validator.validation import validate, ObjectType
    >>> result = validate(payload_bytes, ObjectType.LOCATION)
    >>> for error in result.errors:
    ...     print(error.message)

For implementation details:
    - See validation/checks/__init__.py for validator interface conventions
    - See validation/config.py for tolerance and profile configuration
    - See validation/registry.py for dispatch
"""

from __future__ import annotations

from ocpi_validator.core.enums import ObjectType

from .models import ErrorKind, ValidationError, ValidationResult
from .registry import print_report, validate, validate_files
from .report import PayloadResult, ValidationReport

__all__ = [
    # Data models
    "ErrorKind",
    "ValidationError",
    "ValidationResult",
    "PayloadResult",
    "ValidationReport",
    # Runner functions
    "validate",
    "validate_files",
    "print_report",
    # Enums
    "ObjectType",
]
