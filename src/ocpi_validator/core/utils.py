"""Core utility functions for the OCPI validator.

This module provides shared helpers used by the decoder and the rule sets:
- Field-path construction (``evses[0].connectors[1].max_voltage``)
- ISO-8601 timestamp and date parsing normalised to UTC
- Decimal-string parsing for string-encoded coordinates
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

# YYYY-MM-DDTHH:MM:SS[.fraction][Z|+HH:MM|-HH:MM]
TIMESTAMP_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(Z|[+-]\d{2}:?\d{2})?$",
    re.IGNORECASE,
)

# YYYY-MM-DD
DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Optional sign, digits, optional fraction; no exponent, no nan/inf
DECIMAL_PATTERN = re.compile(r"^-?[0-9]+(\.[0-9]+)?$")


def join_path(parent: str, key: str) -> str:
    """Append an object key to a field path.

    Examples:
        >>> join_path("", "id")
        'id'
        >>> join_path("evses[0]", "uid")
        'evses[0].uid'
    """
    return f"{parent}.{key}" if parent else key


def index_path(parent: str, index: int) -> str:
    """Append an array index to a field path.

    Examples:
        >>> index_path("evses", 2)
        'evses[2]'
    """
    return f"{parent}[{index}]"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date-time string into an aware UTC datetime.

    A missing offset is read as UTC. Fractions beyond microseconds are
    truncated.

    Raises:
        ValueError: If the string is not an ISO-8601 date-time.
    """
    match = TIMESTAMP_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"Not an ISO 8601 date-time: {value!r}")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    tz = timezone.utc
    if offset and offset.upper() != "Z":
        sign = -1 if offset[0] == "-" else 1
        digits = offset[1:].replace(":", "")
        delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
        tz = timezone(sign * delta)
    parsed = datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micros, tzinfo=tz
    )
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"Date-time out of range: {value!r}") from e


def parse_date(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` date (or a full timestamp) as a UTC datetime.

    Raises:
        ValueError: If the string is neither a date nor a date-time.
    """
    match = DATE_PATTERN.fullmatch(value)
    if match is None:
        return parse_timestamp(value)
    year, month, day = (int(g) for g in match.groups())
    return datetime(year, month, day, tzinfo=timezone.utc)


def parse_decimal(value: str) -> Optional[float]:
    """Parse a decimal string such as ``"-122.4194"``; None if it is not one."""
    if not DECIMAL_PATTERN.fullmatch(value):
        return None
    return float(value)


__all__ = [
    "join_path",
    "index_path",
    "parse_timestamp",
    "parse_date",
    "parse_decimal",
]
