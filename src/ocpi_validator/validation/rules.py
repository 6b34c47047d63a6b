"""Reusable semantic rules.

Each rule takes a decoded value plus the field path it lives at and returns
its own list of ``ValidationError`` objects (empty when the value is fine).
Validators concatenate rule outputs; no rule mutates shared state.

Emptiness checks only fire on values that are present but empty: absent
values are the decoder's business, and a profile may have made them optional.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ocpi_validator.core.enums import DimensionType
from ocpi_validator.core.models import (
    EVSE,
    ChargingPeriod,
    Connector,
    Dimension,
    EnergyMix,
    Location,
    OpeningTimes,
)
from ocpi_validator.core.utils import index_path, join_path, parse_decimal
from .models import ValidationError

# ============================================================================
# PATTERNS
# ============================================================================
# Always applied with fullmatch.

# ISO 4217 shape only, no registry lookup
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
# ISO 3166-1 alpha-2 shape
COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")
# ISO 639-1
LANGUAGE_PATTERN = re.compile(r"^[a-z]{2}$")
# H:mm or HH:mm, 0:00 to 23:59
TIME_OF_DAY_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
# 4 to 12 byte hex UID
RFID_UID_PATTERN = re.compile(r"^[A-Fa-f0-9]{8,24}$")
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


# ============================================================================
# REASONS
# ============================================================================

NON_NEGATIVE = "Must be greater than or equal to 0"
POSITIVE = "Must be greater than 0"
PERCENTAGE_RANGE = "Must be between 0 and 100"
INVALID_TIME_OF_DAY = "Invalid time format. Must be in HH:mm format"

_NON_NEGATIVE_DIMENSIONS = frozenset(
    {
        DimensionType.CURRENT,
        DimensionType.ENERGY,
        DimensionType.ENERGY_EXPORT,
        DimensionType.ENERGY_IMPORT,
        DimensionType.POWER,
        DimensionType.VOLTAGE,
        DimensionType.TIME,
        DimensionType.PARKING_TIME,
    }
)
_POSITIVE_DIMENSIONS = frozenset(
    {
        DimensionType.MAX_CURRENT,
        DimensionType.MIN_CURRENT,
        DimensionType.MAX_POWER,
        DimensionType.MIN_POWER,
    }
)


# ============================================================================
# SCALAR RULES
# ============================================================================


def is_empty(value: Optional[Sequence]) -> bool:
    """True for a present but empty string or list."""
    return value is not None and len(value) == 0


def check_non_empty(value: Optional[Sequence], path: str) -> List[ValidationError]:
    if is_empty(value):
        return [ValidationError.missing_required_field(path)]
    return []


def check_non_negative(value: Optional[float], path: str) -> List[ValidationError]:
    if value is not None and value < 0:
        return [ValidationError.invalid_value(path, NON_NEGATIVE)]
    return []


def check_positive(value: Optional[float], path: str) -> List[ValidationError]:
    if value is not None and value <= 0:
        return [ValidationError.invalid_value(path, POSITIVE)]
    return []


def check_range(
    value: Optional[float], low: float, high: float, path: str, reason: str
) -> List[ValidationError]:
    if value is not None and (value < low or value > high):
        return [ValidationError.invalid_value(path, reason)]
    return []


def check_pattern(
    value: Optional[str], pattern: "re.Pattern[str]", path: str, reason: str
) -> List[ValidationError]:
    """Report a present value (empty included) that does not fully match the pattern."""
    if value is not None and not pattern.fullmatch(value):
        return [ValidationError.invalid_value(path, reason)]
    return []


def check_code(
    value: Optional[str], pattern: "re.Pattern[str]", path: str, reason: str
) -> List[ValidationError]:
    """Empty code is a missing field; otherwise it must match the pattern."""
    if is_empty(value):
        return [ValidationError.missing_required_field(path)]
    return check_pattern(value, pattern, path, reason)


def check_currency(value: Optional[str], path: str = "currency") -> List[ValidationError]:
    """Validate an ISO 4217 currency code.

    Examples:
        >>> check_currency("EUR")
        []
        >>> [e.message for e in check_currency("eur")]
        ['Invalid value for field currency: Invalid ISO 4217 currency code']
    """
    return check_code(value, CURRENCY_PATTERN, path, "Invalid ISO 4217 currency code")


def check_time_of_day(value: Optional[str], path: str) -> List[ValidationError]:
    if value is not None and not TIME_OF_DAY_PATTERN.fullmatch(value):
        return [ValidationError.invalid_value(path, INVALID_TIME_OF_DAY)]
    return []


def check_later(start, end, path: str, reason: str) -> List[ValidationError]:
    """Report ``end`` on ``path`` unless it is strictly later than ``start``."""
    if start is not None and end is not None and start >= end:
        return [ValidationError.invalid_value(path, reason)]
    return []


def is_valid_time_zone(identifier: str) -> bool:
    """Check an IANA time zone identifier.

    Examples:
        >>> is_valid_time_zone("Europe/Amsterdam")
        True
        >>> is_valid_time_zone("Mars/Olympus_Mons")
        False
    """
    if not identifier:
        return False
    try:
        ZoneInfo(identifier)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def check_time_zone(value: Optional[str], path: str = "time_zone") -> List[ValidationError]:
    if value is not None and not is_valid_time_zone(value):
        return [ValidationError.invalid_value(path, "Invalid time zone identifier")]
    return []


def check_coordinates(coordinates, path: str) -> List[ValidationError]:
    """Validate string-encoded latitude/longitude of a (possibly absent) point.

    Examples:
        >>> from ocpi_validator.core.models import GeoLocation
        >>> [e.detail for e in check_coordinates(GeoLocation("91", "0"), "coordinates")]
        ['Must be between -90 and 90']
    """
    if coordinates is None:
        return []
    errors: List[ValidationError] = []
    for axis, bound in (("latitude", 90), ("longitude", 180)):
        axis_path = join_path(path, axis)
        value = parse_decimal(getattr(coordinates, axis))
        if value is None:
            errors.append(ValidationError.invalid_value(axis_path, "Must be a decimal number"))
        elif value < -bound or value > bound:
            errors.append(
                ValidationError.invalid_value(axis_path, f"Must be between -{bound} and {bound}")
            )
    return errors


# ============================================================================
# LOCATION / EVSE / CONNECTOR RULES
# ============================================================================


def check_connector(connector: Optional[Connector], path: str) -> List[ValidationError]:
    if connector is None:
        return []
    errors = check_non_empty(connector.id, join_path(path, "id"))
    errors += check_positive(connector.max_voltage, join_path(path, "max_voltage"))
    errors += check_positive(connector.max_amperage, join_path(path, "max_amperage"))
    errors += check_positive(connector.max_electric_power, join_path(path, "max_electric_power"))
    return errors


def check_evse(evse: Optional[EVSE], path: str) -> List[ValidationError]:
    if evse is None:
        return []
    errors = check_non_empty(evse.uid, join_path(path, "uid"))
    errors += check_non_empty(evse.connectors, join_path(path, "connectors"))
    for i, connector in enumerate(evse.connectors or ()):
        errors += check_connector(connector, index_path(join_path(path, "connectors"), i))
    errors += check_coordinates(evse.coordinates, join_path(path, "coordinates"))
    for i, schedule in enumerate(evse.status_schedule or ()):
        schedule_path = index_path(join_path(path, "status_schedule"), i)
        errors += check_later(
            schedule.period_begin,
            schedule.period_end,
            join_path(schedule_path, "period_end"),
            "Must be later than period_begin",
        )
    return errors


def check_opening_times(opening_times: Optional[OpeningTimes], path: str) -> List[ValidationError]:
    if opening_times is None:
        return []
    errors: List[ValidationError] = []
    for i, hours in enumerate(opening_times.regular_hours or ()):
        hours_path = index_path(join_path(path, "regular_hours"), i)
        errors += check_range(
            hours.weekday, 1, 7, join_path(hours_path, "weekday"), "Must be between 1 and 7"
        )
        errors += check_time_of_day(hours.period_begin, join_path(hours_path, "period_begin"))
        errors += check_time_of_day(hours.period_end, join_path(hours_path, "period_end"))
    for key in ("exceptional_openings", "exceptional_closings"):
        for i, period in enumerate(getattr(opening_times, key) or ()):
            period_path = index_path(join_path(path, key), i)
            errors += check_later(
                period.period_begin,
                period.period_end,
                join_path(period_path, "period_end"),
                "Must be later than period_begin",
            )
    return errors


def check_energy_mix(energy_mix: Optional[EnergyMix], path: str) -> List[ValidationError]:
    if energy_mix is None:
        return []
    errors: List[ValidationError] = []
    for i, source in enumerate(energy_mix.energy_sources or ()):
        source_path = index_path(join_path(path, "energy_sources"), i)
        errors += check_range(
            source.percentage, 0, 100, join_path(source_path, "percentage"), PERCENTAGE_RANGE
        )
    for i, impact in enumerate(energy_mix.environ_impact or ()):
        impact_path = index_path(join_path(path, "environ_impact"), i)
        errors += check_non_negative(impact.amount, join_path(impact_path, "amount"))
    return errors


def check_location(location: Optional[Location], prefix: str = "") -> List[ValidationError]:
    """Apply all Location rules, with paths under ``prefix`` (e.g. ``location``)."""
    if location is None:
        return []
    errors: List[ValidationError] = []
    for key in ("id", "address", "city", "country"):
        errors += check_non_empty(getattr(location, key), join_path(prefix, key))
    errors += check_coordinates(location.coordinates, join_path(prefix, "coordinates"))
    errors += check_time_zone(location.time_zone, join_path(prefix, "time_zone"))
    for i, related in enumerate(location.related_locations or ()):
        errors += check_coordinates(related, index_path(join_path(prefix, "related_locations"), i))
    for i, evse in enumerate(location.evses or ()):
        errors += check_evse(evse, index_path(join_path(prefix, "evses"), i))
    errors += check_opening_times(location.opening_times, join_path(prefix, "opening_times"))
    errors += check_energy_mix(location.energy_mix, join_path(prefix, "energy_mix"))
    return errors


# ============================================================================
# CHARGING PERIOD RULES (Session / CDR)
# ============================================================================


def check_dimension(dimension: Dimension, path: str, allow_flat: bool) -> List[ValidationError]:
    """Validate a dimension volume against its type's range.

    Args:
        dimension: Decoded dimension.
        path: Path of the dimension (``charging_periods[0].dimensions[1]``).
        allow_flat: True for CDRs (FLAT volume must be 1), False for Sessions
            (FLAT is rejected outright).
    """
    volume_path = join_path(path, "volume")
    kind = dimension.type
    volume = dimension.volume
    if kind in _NON_NEGATIVE_DIMENSIONS:
        return check_non_negative(volume, volume_path)
    if kind in _POSITIVE_DIMENSIONS:
        return check_positive(volume, volume_path)
    if kind == DimensionType.POWER_FACTOR:
        return check_range(volume, -1, 1, volume_path, "Must be between -1 and 1")
    if kind == DimensionType.SOC:
        return check_range(volume, 0, 100, volume_path, PERCENTAGE_RANGE)
    if kind == DimensionType.FLAT:
        if not allow_flat:
            return [
                ValidationError.invalid_value(
                    join_path(path, "type"), "FLAT dimension type is not allowed in Sessions"
                )
            ]
        if volume is not None and volume != 1:
            return [ValidationError.invalid_value(volume_path, "Flat dimension volume must be 1")]
    return []


def check_charging_periods(
    periods: Optional[Sequence[ChargingPeriod]],
    allow_flat: bool,
    path: str = "charging_periods",
) -> List[ValidationError]:
    """Validate dimensions and chronological order of charging periods.

    Each period must start strictly after the one before it; a violation is
    reported on the later period.
    """
    errors: List[ValidationError] = []
    previous_start = None
    for i, period in enumerate(periods or ()):
        period_path = index_path(path, i)
        errors += check_non_empty(period.dimensions, join_path(period_path, "dimensions"))
        if (
            previous_start is not None
            and period.start_date_time is not None
            and period.start_date_time <= previous_start
        ):
            errors.append(
                ValidationError.invalid_value(
                    join_path(period_path, "start_date_time"),
                    "Charging periods must be in chronological order",
                )
            )
        previous_start = period.start_date_time
        for j, dimension in enumerate(period.dimensions or ()):
            errors += check_dimension(
                dimension, index_path(join_path(period_path, "dimensions"), j), allow_flat
            )
    return errors


__all__ = [
    "CURRENCY_PATTERN",
    "COUNTRY_CODE_PATTERN",
    "LANGUAGE_PATTERN",
    "TIME_OF_DAY_PATTERN",
    "RFID_UID_PATTERN",
    "EMAIL_PATTERN",
    "NON_NEGATIVE",
    "POSITIVE",
    "PERCENTAGE_RANGE",
    "is_empty",
    "check_non_empty",
    "check_non_negative",
    "check_positive",
    "check_range",
    "check_pattern",
    "check_code",
    "check_currency",
    "check_time_of_day",
    "check_later",
    "is_valid_time_zone",
    "check_time_zone",
    "check_coordinates",
    "check_connector",
    "check_evse",
    "check_opening_times",
    "check_energy_mix",
    "check_location",
    "check_dimension",
    "check_charging_periods",
]
