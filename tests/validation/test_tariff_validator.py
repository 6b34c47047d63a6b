"""Tests for the TariffValidator."""

import json

import pytest

from ocpi_validator.validation.checks.tariff import TariffValidator
from ocpi_validator.validation.models import ErrorKind, ValidationError


def encode(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_tariff_valid(tariff_payload):  # pylint: disable=redefined-outer-name
    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is True


def test_tariff_inverted_kwh_range(tariff_payload):  # pylint: disable=redefined-outer-name
    """An inverted kWh range is reported on max_kwh."""
    restrictions = tariff_payload["elements"][0]["restrictions"]
    restrictions["min_kwh"] = 50
    restrictions["max_kwh"] = 10

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is False
    assert result.errors == (
        ValidationError.invalid_value("elements[0].restrictions.max_kwh", "Must be greater than min_kwh"),
    )


@pytest.mark.parametrize(
    "low_key, high_key",
    [
        ("min_power", "max_power"),
        ("min_duration", "max_duration"),
        ("min_current", "max_current"),
    ],
)
def test_tariff_inverted_limit_pairs(tariff_payload, low_key, high_key):  # pylint: disable=redefined-outer-name
    restrictions = tariff_payload["elements"][0]["restrictions"]
    restrictions[low_key] = 20
    restrictions[high_key] = 10

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_value(
            f"elements[0].restrictions.{high_key}", f"Must be greater than {low_key}"
        ),
    )


def test_tariff_equal_limits_are_valid(tariff_payload):  # pylint: disable=redefined-outer-name
    restrictions = tariff_payload["elements"][0]["restrictions"]
    restrictions["min_kwh"] = 10
    restrictions["max_kwh"] = 10

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is True


def test_tariff_negative_limit(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][0]["restrictions"]["min_kwh"] = -1

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_value(
            "elements[0].restrictions.min_kwh", "Must be greater than or equal to 0"
        ),
    )


@pytest.mark.parametrize(
    "value, expect_valid",
    [("08:00", True), ("8:00", True), ("23:59", True), ("24:00", False), ("08:60", False), ("0800", False)],
)
def test_tariff_restriction_time_format(tariff_payload, value, expect_valid):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][0]["restrictions"]["start_time"] = value

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is expect_valid
    if not expect_valid:
        assert result.errors == (
            ValidationError.invalid_value(
                "elements[0].restrictions.start_time", "Invalid time format. Must be in HH:mm format"
            ),
        )


def test_tariff_restriction_date_window(tariff_payload):  # pylint: disable=redefined-outer-name
    restrictions = tariff_payload["elements"][0]["restrictions"]
    restrictions["start_date"] = "2024-06-01"
    restrictions["end_date"] = "2024-05-01"

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_value(
            "elements[0].restrictions.end_date", "Must be later than start_date"
        ),
    )


def test_tariff_restriction_bad_date_is_type_error(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][0]["restrictions"]["start_date"] = "June 1st"

    result = TariffValidator().validate(encode(tariff_payload))

    assert len(result.errors) == 1
    assert result.errors[0].kind == ErrorKind.INVALID_FIELD_TYPE
    assert result.errors[0].field == "elements[0].restrictions.start_date"


@pytest.mark.parametrize(
    "vat, expect_valid",
    [(0, True), (100, True), (21.5, True), (-0.1, False), (100.1, False)],
)
def test_tariff_vat_range(tariff_payload, vat, expect_valid):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][0]["price_components"][0]["vat"] = vat

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is expect_valid
    if not expect_valid:
        assert result.errors == (
            ValidationError.invalid_value(
                "elements[0].price_components[0].vat", "Must be between 0 and 100"
            ),
        )


@pytest.mark.parametrize("step_size", [0, -1])
def test_tariff_step_size_positive(tariff_payload, step_size):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][1]["price_components"][0]["step_size"] = step_size

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_value(
            "elements[1].price_components[0].step_size", "Must be greater than 0"
        ),
    )


def test_tariff_step_size_must_be_integer(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][1]["price_components"][0]["step_size"] = 1.5

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_field_type("elements[1].price_components[0].step_size", "integer"),
    )


def test_tariff_empty_elements_and_components(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][1]["price_components"] = []

    result = TariffValidator().validate(encode(tariff_payload))
    assert result.errors == (ValidationError.missing_required_field("elements[1].price_components"),)

    tariff_payload["elements"] = []

    result = TariffValidator().validate(encode(tariff_payload))
    assert result.errors == (ValidationError.missing_required_field("elements"),)


@pytest.mark.parametrize(
    "country_code, expected",
    [
        ("nl", ValidationError.invalid_value("country_code", "Invalid ISO 3166-1 alpha-2 country code")),
        ("NLD", ValidationError.invalid_value("country_code", "Invalid ISO 3166-1 alpha-2 country code")),
        ("", ValidationError.missing_required_field("country_code")),
    ],
)
def test_tariff_country_code(tariff_payload, country_code, expected):  # pylint: disable=redefined-outer-name
    tariff_payload["country_code"] = country_code

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (expected,)


def test_tariff_validity_window(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["end_date_time"] = tariff_payload["start_date_time"]

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_value("end_date_time", "Must be later than start_date_time"),
    )


def test_tariff_price_bounds(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["min_price"] = {"excl_vat": 10.0, "incl_vat": -1}
    tariff_payload["max_price"] = {"excl_vat": 5.0}

    result = TariffValidator().validate(encode(tariff_payload))

    assert list(result.errors) == [
        ValidationError.invalid_value("min_price.incl_vat", "Must be greater than or equal to 0"),
        ValidationError.invalid_value("max_price.excl_vat", "Must be greater than or equal to min_price"),
    ]


def test_tariff_open_type_falls_back(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["type"] = "LOYALTY"

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is True


def test_tariff_closed_component_type(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][0]["price_components"][0]["type"] = "POWER"

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.errors == (
        ValidationError.invalid_field_type(
            "elements[0].price_components[0].type", "one of ENERGY, FLAT, PARKING_TIME, TIME"
        ),
    )


def test_tariff_day_of_week_accepts_names_and_numbers(tariff_payload):  # pylint: disable=redefined-outer-name
    tariff_payload["elements"][0]["restrictions"]["day_of_week"] = ["monday", 7]

    result = TariffValidator().validate(encode(tariff_payload))

    assert result.is_valid is True
