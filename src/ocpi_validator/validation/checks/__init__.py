"""Per-object validators base interface.

This module defines the protocol (interface) that every OCPI object validator
implements. Each validator owns one object kind (Location, Token, ...) and runs
two phases:

1. Decode: the raw payload is decoded against the object's schema. Any decode
   error ends validation and is returned as-is.
2. Check: semantic rules run on the typed entity and their errors are
   concatenated.

To implement a new validator:

1. Create a new file in this directory (e.g., `reservation.py`)
2. Define a class with ``object_type``, ``schema_name``, ``validate()`` and
   ``check()``; ``validate()`` usually just calls ``run_phases(self, data)``
3. Add the class to ``_VALIDATOR_CLASSES`` in registry.py

Example:
    ```python
    # checks/my_object.py
    from typing import List
    from ocpi_validator.core.enums import ObjectType
    from ..models import ValidationError, ValidationResult
    from . import run_phases

    class MyObjectValidator:
        object_type = ObjectType.TOKEN
        schema_name = "token"

        def __init__(self, schemas=None):
            self.schemas = schemas

        def validate(self, data) -> ValidationResult:
            return run_phases(self, data)

        def check(self, entity) -> List[ValidationError]:
            return []
    ```
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Protocol, Union

from ocpi_validator.core import decoder
from ocpi_validator.core.enums import ObjectType
from ocpi_validator.core.schemas import Schema
from ..models import ValidationError, ValidationResult

logger = logging.getLogger(__name__)


class ObjectValidator(Protocol):
    """Protocol defining the interface for OCPI object validators.

    Use duck typing (Protocol) for flexibility - no need to inherit from a
    base class.

    Attributes:
        object_type: Object kind this validator handles.
        schema_name: Top-level schema used by the decoder.
        schemas: Schema set to decode with; None means the default profile.
    """

    object_type: ObjectType
    schema_name: str
    schemas: Optional[Mapping[str, Schema]]

    def validate(self, data: Union[bytes, str]) -> ValidationResult:
        """Validate a raw payload.

        Args:
            data: JSON payload as UTF-8 bytes or text.

        Returns:
            ValidationResult; never raises for malformed payloads.
        """
        ...

    def check(self, entity: Any) -> List[ValidationError]:
        """Run the semantic rules on a decoded entity.

        Returns:
            Errors in rule order; empty list if the entity is valid.
        """
        ...


def run_phases(validator: ObjectValidator, data: Union[bytes, str]) -> ValidationResult:
    """Decode then check; decode errors short-circuit the semantic phase."""
    entity, errors = decoder.decode_payload(data, validator.schema_name, validator.schemas)
    if entity is None:
        logger.debug("%s: decode phase failed", validator.object_type.value)
        return ValidationResult.from_errors(errors)
    errors = validator.check(entity)
    logger.debug(
        "%s: semantic phase found %d error(s)", validator.object_type.value, len(errors)
    )
    return ValidationResult.from_errors(errors)


__all__ = ["ObjectValidator", "run_phases"]
