"""Validator registry and dispatcher.

This module orchestrates validation:
- ALL_VALIDATORS: Validator instances for the default required-field profile
- build_validators(): Validator instances for a custom schema set
- validate(): Dispatches one payload to the validator for its object type
- validate_files(): Validates a batch of files into a ValidationReport
- print_report(): Displays a batch report on the console
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from tqdm import tqdm

from ocpi_validator.core.enums import ObjectType
from ocpi_validator.core.schemas import Schema
from .checks import ObjectValidator
from .checks.cdr import CDRValidator
from .checks.location import LocationValidator
from .checks.session import SessionValidator
from .checks.tariff import TariffValidator
from .checks.token import TokenValidator
from .models import ValidationError, ValidationResult
from .report import PayloadResult, ValidationReport

logger = logging.getLogger(__name__)

_VALIDATOR_CLASSES = (
    LocationValidator,
    TariffValidator,
    SessionValidator,
    CDRValidator,
    TokenValidator,
)


def build_validators(schemas: Optional[Mapping[str, Schema]] = None) -> List[ObjectValidator]:
    """Instantiate one validator per supported object type.

    Args:
        schemas: Schema set (e.g. from a profile); None for the defaults.
    """
    return [cls(schemas) for cls in _VALIDATOR_CLASSES]


# Registry of validators for the default profile
ALL_VALIDATORS: List[ObjectValidator] = build_validators()


def _find_validator(
    object_type: ObjectType, validators: Iterable[ObjectValidator]
) -> Optional[ObjectValidator]:
    for validator in validators:
        if validator.object_type == object_type:
            return validator
    return None


def validate(
    data: Union[bytes, str],
    object_type: Union[ObjectType, str],
    validators: Optional[Sequence[ObjectValidator]] = None,
) -> ValidationResult:
    """Validate a raw OCPI payload.

    Args:
        data: JSON payload as UTF-8 bytes or text.
        object_type: Object kind, as ObjectType or its name (``"location"``).
        validators: Validators to dispatch to; defaults to ALL_VALIDATORS.

    Returns:
        ValidationResult. An object type with no registered validator yields
        a single NOT_IMPLEMENTED error.

    Raises:
        ValueError: If ``object_type`` is a string naming no object type.

    Examples:
        >>> validate(b'{"uid": "x"}', "token").is_valid
        False
        >>> validate(b"[]", ObjectType.LOCATION).errors[0].message
        'Invalid JSON format'
    """
    if not isinstance(object_type, ObjectType):
        object_type = ObjectType.parse(object_type)

    validator = _find_validator(object_type, validators if validators is not None else ALL_VALIDATORS)
    if validator is None:
        logger.debug("No validator registered for %s", object_type.value)
        return ValidationResult.from_errors([ValidationError.not_implemented()])

    logger.debug("Dispatching payload to %s", type(validator).__name__)
    return validator.validate(data)


def validate_files(
    paths: Sequence[Union[str, Path]],
    object_type: Union[ObjectType, str],
    validators: Optional[Sequence[ObjectValidator]] = None,
) -> ValidationReport:
    """Validate a batch of payload files.

    Args:
        paths: Payload files, each holding one JSON object.
        object_type: Object kind every file is validated as.
        validators: Validators to dispatch to; defaults to ALL_VALIDATORS.

    Returns:
        ValidationReport with one entry per file, in input order.

    Raises:
        FileNotFoundError: If any file does not exist (checked before any
            validation runs).
        ValueError: If ``object_type`` names no object type.
        OSError: If a file cannot be read.

    Examples:
        >>> report = validate_files(["loc1.json", "loc2.json"], "location")
        >>> print(report.summary())
    """
    if not isinstance(object_type, ObjectType):
        object_type = ObjectType.parse(object_type)

    file_paths = [Path(p) for p in paths]
    for path in file_paths:
        if not path.is_file():
            raise FileNotFoundError(f"Payload file not found: {path}")

    results: List[PayloadResult] = []
    for path in tqdm(
        file_paths, desc="Validating", unit="file", disable=len(file_paths) < 2, leave=False
    ):
        data = path.read_bytes()
        result = validate(data, object_type, validators)
        results.append(PayloadResult(source=str(path), object_type=object_type, result=result))

    return ValidationReport(results=results)


def print_report(report: ValidationReport) -> None:
    """Print a batch validation report to console.

    Displays a summary followed by every error of each failed payload.

    Args:
        report: ValidationReport to display.

    Examples:
        >>> print_report(report)
        Validation Summary:
          Payloads: 2 validated (1 valid, 1 invalid)
          Errors: 1

        Failed Payloads:
        ❌ broken.json (location): 1 errors
           - Missing required field: address
    """
    print(report.summary())
    print()

    failed = report.get_failed()

    if not failed:
        print("✅ All payloads are valid!")
        return

    print("Failed Payloads:")
    for item in failed:
        print(f"❌ {item.source} ({item.object_type.value}): {item.result.error_count} errors")
        for error in item.result.errors:
            print(f"   - {error.message}")


__all__ = [
    "ALL_VALIDATORS",
    "build_validators",
    "validate",
    "validate_files",
    "print_report",
]
