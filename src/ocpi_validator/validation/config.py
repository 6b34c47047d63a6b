"""Validation configuration constants.

This module centralizes validation tolerances and required-field profiles.

Tolerances:
    - TOTALS_ABS_TOL: Allowed absolute difference between a CDR total and the
      sum of its charging-period dimensions.
    - FLOAT_EPSILON: Absorbs float noise so that a difference of exactly
      TOTALS_ABS_TOL still passes.

Profiles:
    A profile is a YAML file with a ``required_fields`` mapping of schema name
    to the complete list of required JSON keys for that schema. Schemas not
    listed keep their defaults from ``core/schemas.py``::

        required_fields:
          location: [id, type, address, city, country, coordinates, time_zone, last_updated]
          token: [uid, type, auth_id, issuer, valid, whitelist, last_updated]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

import yaml

from ocpi_validator.core.schemas import DEFAULT_REQUIRED_FIELDS, FIELD_TABLES

logger = logging.getLogger(__name__)

# ============================================================================
# TOLERANCE CONSTANTS
# ============================================================================

# CDR totals vs. summed dimension volumes (kWh, hours)
TOTALS_ABS_TOL = 0.01
FLOAT_EPSILON = 1e-9


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def exceeds_tolerance(actual: float, expected: float, tolerance: float = TOTALS_ABS_TOL) -> bool:
    """Check whether two totals differ by more than the tolerance.

    Examples:
        >>> exceeds_tolerance(10.01, 10.0)
        False
        >>> exceeds_tolerance(10.02, 10.0)
        True
    """
    return abs(actual - expected) > tolerance + FLOAT_EPSILON


def default_required_fields() -> Dict[str, Tuple[str, ...]]:
    """Get a copy of the default required-field profile."""
    return {name: tuple(keys) for name, keys in DEFAULT_REQUIRED_FIELDS.items()}


def parse_profile(data: Optional[Mapping]) -> Dict[str, Tuple[str, ...]]:
    """Validate a loaded profile document and return its overrides.

    Args:
        data: Parsed YAML document (None for an empty file).

    Returns:
        Mapping of schema name to required keys, only for the schemas the
        profile mentions.

    Raises:
        ValueError: If the document is malformed, names an unknown schema, or
            lists a key the schema does not define.
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Profile must be a mapping with a 'required_fields' key")

    required = data.get("required_fields") or {}
    if not isinstance(required, Mapping):
        raise ValueError("'required_fields' must map schema names to lists of keys")

    overrides: Dict[str, Tuple[str, ...]] = {}
    for name, keys in required.items():
        if name not in FIELD_TABLES:
            raise ValueError(
                f"Unknown schema '{name}' in profile. "
                f"Valid schemas: {', '.join(sorted(FIELD_TABLES))}"
            )
        if keys is None:
            keys = []
        if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
            raise ValueError(f"Required fields for '{name}' must be a list of strings")
        known = {spec.key for spec in FIELD_TABLES[name][1]}
        unknown = [k for k in keys if k not in known]
        if unknown:
            raise ValueError(f"Unknown field(s) for schema '{name}': {', '.join(unknown)}")
        overrides[name] = tuple(keys)
    return overrides


def load_profile(path: Union[str, Path]) -> Dict[str, Tuple[str, ...]]:
    """Load required-field overrides from a YAML profile.

    Args:
        path: Path to the profile YAML.

    Returns:
        Mapping of schema name to required keys for overridden schemas.

    Raises:
        FileNotFoundError: If the profile does not exist.
        ValueError: If the YAML is unparsable or the profile is invalid.
    """
    profile_path = Path(path)
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")
    try:
        with open(profile_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse profile {profile_path}: {e}") from e

    overrides = parse_profile(data)
    logger.debug("Loaded profile %s overriding %d schema(s)", profile_path, len(overrides))
    return overrides


def effective_required_fields(
    overrides: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> Dict[str, Tuple[str, ...]]:
    """Merge profile overrides over the defaults, covering every schema."""
    merged = {name: DEFAULT_REQUIRED_FIELDS.get(name, ()) for name in FIELD_TABLES}
    merged.update(overrides or {})
    return {name: tuple(keys) for name, keys in merged.items()}


def dump_profile(overrides: Optional[Mapping[str, Tuple[str, ...]]] = None) -> str:
    """Render the effective profile as YAML.

    Examples:
        >>> "required_fields:" in dump_profile()
        True
    """
    merged = effective_required_fields(overrides)
    document = {"required_fields": {name: list(keys) for name, keys in merged.items()}}
    return yaml.safe_dump(document, sort_keys=False, default_flow_style=None)


__all__ = [
    "TOTALS_ABS_TOL",
    "FLOAT_EPSILON",
    "exceeds_tolerance",
    "default_required_fields",
    "parse_profile",
    "load_profile",
    "effective_required_fields",
    "dump_profile",
]
