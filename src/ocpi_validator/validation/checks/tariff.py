"""Tariff validation.

Checks identifiers and ISO codes, the element and price-component structure,
step sizes and VAT rates, the validity window, element restrictions (time of
day, date window, non-negative limits with min <= max) and min/max prices.

``check_tariff`` takes a path prefix so CDRs can apply the same rules to the
tariffs they embed (``tariffs[0].elements[1]...``).
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Union

from ocpi_validator.core.enums import ObjectType
from ocpi_validator.core.models import Price, Tariff, TariffElement, TariffRestrictions
from ocpi_validator.core.schemas import Schema
from ocpi_validator.core.utils import index_path, join_path
from ..models import ValidationError, ValidationResult
from ..rules import (
    COUNTRY_CODE_PATTERN,
    PERCENTAGE_RANGE,
    check_code,
    check_currency,
    check_later,
    check_non_empty,
    check_non_negative,
    check_positive,
    check_range,
    check_time_of_day,
)
from . import run_phases

# (min key, max key) pairs bounded below by 0 and ordered min <= max
_LIMIT_PAIRS = (
    ("min_kwh", "max_kwh"),
    ("min_power", "max_power"),
    ("min_duration", "max_duration"),
    ("min_current", "max_current"),
)


def check_restrictions(restrictions: Optional[TariffRestrictions], path: str) -> List[ValidationError]:
    if restrictions is None:
        return []
    errors = check_time_of_day(restrictions.start_time, join_path(path, "start_time"))
    errors += check_time_of_day(restrictions.end_time, join_path(path, "end_time"))
    errors += check_later(
        restrictions.start_date,
        restrictions.end_date,
        join_path(path, "end_date"),
        "Must be later than start_date",
    )
    for low_key, high_key in _LIMIT_PAIRS:
        low = getattr(restrictions, low_key)
        high = getattr(restrictions, high_key)
        errors += check_non_negative(low, join_path(path, low_key))
        errors += check_non_negative(high, join_path(path, high_key))
        if low is not None and high is not None and low > high:
            errors.append(
                ValidationError.invalid_value(
                    join_path(path, high_key), f"Must be greater than {low_key}"
                )
            )
    return errors


def check_element(element: TariffElement, path: str) -> List[ValidationError]:
    components_path = join_path(path, "price_components")
    errors = check_non_empty(element.price_components, components_path)
    for i, component in enumerate(element.price_components or ()):
        component_path = index_path(components_path, i)
        errors += check_positive(component.step_size, join_path(component_path, "step_size"))
        errors += check_range(
            component.vat, 0, 100, join_path(component_path, "vat"), PERCENTAGE_RANGE
        )
    errors += check_restrictions(element.restrictions, join_path(path, "restrictions"))
    return errors


def check_prices(
    min_price: Optional[Price], max_price: Optional[Price], prefix: str
) -> List[ValidationError]:
    """Price bounds are non-negative and ``max_price`` is not below ``min_price``."""
    errors: List[ValidationError] = []
    for key, price in (("min_price", min_price), ("max_price", max_price)):
        if price is None:
            continue
        price_path = join_path(prefix, key)
        errors += check_non_negative(price.excl_vat, join_path(price_path, "excl_vat"))
        errors += check_non_negative(price.incl_vat, join_path(price_path, "incl_vat"))
    if (
        min_price is not None
        and max_price is not None
        and min_price.excl_vat is not None
        and max_price.excl_vat is not None
        and max_price.excl_vat < min_price.excl_vat
    ):
        errors.append(
            ValidationError.invalid_value(
                join_path(join_path(prefix, "max_price"), "excl_vat"),
                "Must be greater than or equal to min_price",
            )
        )
    return errors


def check_tariff(tariff: Tariff, prefix: str = "") -> List[ValidationError]:
    """Apply all Tariff rules, with paths under ``prefix``."""
    errors = check_non_empty(tariff.id, join_path(prefix, "id"))
    errors += check_currency(tariff.currency, join_path(prefix, "currency"))
    errors += check_code(
        tariff.country_code,
        COUNTRY_CODE_PATTERN,
        join_path(prefix, "country_code"),
        "Invalid ISO 3166-1 alpha-2 country code",
    )
    errors += check_non_empty(tariff.party_id, join_path(prefix, "party_id"))

    elements_path = join_path(prefix, "elements")
    errors += check_non_empty(tariff.elements, elements_path)
    for i, element in enumerate(tariff.elements or ()):
        errors += check_element(element, index_path(elements_path, i))

    errors += check_later(
        tariff.start_date_time,
        tariff.end_date_time,
        join_path(prefix, "end_date_time"),
        "Must be later than start_date_time",
    )
    errors += check_prices(tariff.min_price, tariff.max_price, prefix)
    return errors


class TariffValidator:
    """Validate OCPI Tariff payloads."""

    object_type = ObjectType.TARIFF
    schema_name = "tariff"

    def __init__(self, schemas: Optional[Mapping[str, Schema]] = None) -> None:
        self.schemas = schemas

    def validate(self, data: Union[bytes, str]) -> ValidationResult:
        return run_phases(self, data)

    def check(self, entity: Tariff) -> List[ValidationError]:
        return check_tariff(entity)
