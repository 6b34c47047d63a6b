"""Session validation.

Checks identifiers, currency, energy and cost values, the start/end ordering,
consistency between the session status and its fields, the embedded
Location/EVSE/Connector, and the charging periods (FLAT dimensions are not
allowed in a session).
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Union

from ocpi_validator.core.enums import ObjectType, SessionStatus
from ocpi_validator.core.models import Session
from ocpi_validator.core.schemas import Schema
from ..models import ValidationError, ValidationResult
from ..rules import (
    check_charging_periods,
    check_connector,
    check_currency,
    check_evse,
    check_later,
    check_location,
    check_non_empty,
    check_non_negative,
)
from . import run_phases


def check_status_consistency(session: Session) -> List[ValidationError]:
    """Fields a session must (or must not) carry for its status.

    - COMPLETED: ``end_date_time`` and ``total_cost`` are required.
    - ACTIVE, PENDING: ``end_date_time`` must be absent.
    - RESERVED: ``kwh`` must be 0.
    - INVALID: no constraint.
    """
    errors: List[ValidationError] = []
    status = session.status
    if status == SessionStatus.COMPLETED:
        if session.end_date_time is None:
            errors.append(ValidationError.missing_required_field("end_date_time"))
        if session.total_cost is None:
            errors.append(ValidationError.missing_required_field("total_cost"))
    elif status in (SessionStatus.ACTIVE, SessionStatus.PENDING):
        if session.end_date_time is not None:
            errors.append(
                ValidationError.invalid_value(
                    "end_date_time", f"Should not be present for {status.value} session"
                )
            )
    elif status == SessionStatus.RESERVED:
        if session.kwh is not None and session.kwh != 0:
            errors.append(ValidationError.invalid_value("kwh", "Should be 0 for RESERVED session"))
    return errors


class SessionValidator:
    """Validate OCPI Session payloads."""

    object_type = ObjectType.SESSION
    schema_name = "session"

    def __init__(self, schemas: Optional[Mapping[str, Schema]] = None) -> None:
        self.schemas = schemas

    def validate(self, data: Union[bytes, str]) -> ValidationResult:
        return run_phases(self, data)

    def check(self, entity: Session) -> List[ValidationError]:
        errors = check_non_empty(entity.id, "id")
        errors += check_non_empty(entity.auth_id, "auth_id")
        errors += check_currency(entity.currency)
        errors += check_non_negative(entity.kwh, "kwh")
        errors += check_later(
            entity.start_date_time,
            entity.end_date_time,
            "end_date_time",
            "Must be later than start_date_time",
        )
        errors += check_status_consistency(entity)
        errors += check_location(entity.location, "location")
        errors += check_evse(entity.evse, "evse")
        errors += check_connector(entity.connector, "connector")
        errors += check_charging_periods(entity.charging_periods, allow_flat=False)
        errors += check_non_negative(entity.total_cost, "total_cost")
        return errors
