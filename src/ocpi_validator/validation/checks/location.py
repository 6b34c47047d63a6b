"""Location validation.

A Location must carry non-empty identifiers and address fields, coordinates
within range, an IANA time zone, and well-formed EVSEs and connectors.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Union

from ocpi_validator.core.enums import ObjectType
from ocpi_validator.core.models import Location
from ocpi_validator.core.schemas import Schema
from ..models import ValidationError, ValidationResult
from ..rules import check_location
from . import run_phases


class LocationValidator:
    """Validate OCPI Location payloads."""

    object_type = ObjectType.LOCATION
    schema_name = "location"

    def __init__(self, schemas: Optional[Mapping[str, Schema]] = None) -> None:
        self.schemas = schemas

    def validate(self, data: Union[bytes, str]) -> ValidationResult:
        return run_phases(self, data)

    def check(self, entity: Location) -> List[ValidationError]:
        return check_location(entity)
