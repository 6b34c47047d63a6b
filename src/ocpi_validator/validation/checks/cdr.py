"""CDR (Charge Detail Record) validation.

Beyond per-field checks, a CDR must be internally consistent: its
``total_energy``, ``total_time`` and ``total_parking_time`` must match the sums
of the ENERGY, TIME and PARKING_TIME dimension volumes across all charging
periods, within ``TOTALS_ABS_TOL``.
"""

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional, Sequence, Union

from ocpi_validator.core.enums import DimensionType, ObjectType
from ocpi_validator.core.models import CDR, ChargingPeriod
from ocpi_validator.core.schemas import Schema
from ocpi_validator.core.utils import index_path
from ..config import exceeds_tolerance
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
from .tariff import check_tariff

# total field -> (summed dimension type, mismatch reason)
_TOTALS = (
    (
        "total_energy",
        DimensionType.ENERGY,
        "Total energy does not match the sum of energy dimensions",
    ),
    (
        "total_time",
        DimensionType.TIME,
        "Total time does not match the sum of time dimensions",
    ),
    (
        "total_parking_time",
        DimensionType.PARKING_TIME,
        "Total parking time does not match the sum of parking time dimensions",
    ),
)


def sum_dimensions(periods: Optional[Sequence[ChargingPeriod]]) -> Dict[DimensionType, float]:
    """Sum dimension volumes per type across all charging periods.

    Examples:
        >>> sum_dimensions([])
        {}
    """
    volumes: Dict[DimensionType, List[float]] = {}
    for period in periods or ():
        for dimension in period.dimensions or ():
            if dimension.volume is None:
                continue
            volumes.setdefault(dimension.type, []).append(dimension.volume)
    return {kind: math.fsum(values) for kind, values in volumes.items()}


def check_totals(cdr: CDR) -> List[ValidationError]:
    """Totals are non-negative and match the summed charging-period dimensions.

    ``total_parking_time`` is only compared when present.
    """
    errors: List[ValidationError] = []
    for key in ("total_cost", "total_energy", "total_time", "total_parking_time"):
        errors += check_non_negative(getattr(cdr, key), key)

    sums = sum_dimensions(cdr.charging_periods)
    for key, kind, reason in _TOTALS:
        total = getattr(cdr, key)
        if total is None:
            continue
        if exceeds_tolerance(sums.get(kind, 0.0), total):
            errors.append(ValidationError.invalid_value(key, reason))
    return errors


class CDRValidator:
    """Validate OCPI CDR payloads."""

    object_type = ObjectType.CDR
    schema_name = "cdr"

    def __init__(self, schemas: Optional[Mapping[str, Schema]] = None) -> None:
        self.schemas = schemas

    def validate(self, data: Union[bytes, str]) -> ValidationResult:
        return run_phases(self, data)

    def check(self, entity: CDR) -> List[ValidationError]:
        errors = check_non_empty(entity.id, "id")
        errors += check_non_empty(entity.auth_id, "auth_id")
        errors += check_currency(entity.currency)
        errors += check_later(
            entity.start_date_time,
            entity.end_date_time,
            "end_date_time",
            "Must be later than start_date_time",
        )
        errors += check_non_empty(entity.charging_periods, "charging_periods")
        errors += check_totals(entity)
        errors += check_charging_periods(entity.charging_periods, allow_flat=True)
        errors += check_location(entity.location, "location")
        errors += check_evse(entity.evse, "evse")
        errors += check_connector(entity.connector, "connector")
        for i, tariff in enumerate(entity.tariffs or ()):
            errors += check_tariff(tariff, index_path("tariffs", i))
        return errors
