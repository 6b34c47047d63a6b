"""Tests for the SessionValidator."""

import json

import pytest

from ocpi_validator.validation.checks.session import SessionValidator
from ocpi_validator.validation.models import ValidationError


def encode(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_session_valid(session_payload):  # pylint: disable=redefined-outer-name
    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is True


def test_session_reserved_with_energy(session_payload):  # pylint: disable=redefined-outer-name
    """A RESERVED session must not have consumed energy."""
    session_payload["status"] = "RESERVED"
    session_payload["kwh"] = 5.0

    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is False
    assert ValidationError.invalid_value("kwh", "Should be 0 for RESERVED session") in result.errors


def test_session_reserved_with_zero_kwh(session_payload):  # pylint: disable=redefined-outer-name
    session_payload["status"] = "RESERVED"
    session_payload["kwh"] = 0

    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is True


def test_session_completed_requires_end_and_cost(session_payload):  # pylint: disable=redefined-outer-name
    del session_payload["end_date_time"]
    del session_payload["total_cost"]

    result = SessionValidator().validate(encode(session_payload))

    assert list(result.errors) == [
        ValidationError.missing_required_field("end_date_time"),
        ValidationError.missing_required_field("total_cost"),
    ]


@pytest.mark.parametrize("status", ["ACTIVE", "PENDING"])
def test_session_open_status_rejects_end(session_payload, status):  # pylint: disable=redefined-outer-name
    session_payload["status"] = status

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (
        ValidationError.invalid_value("end_date_time", f"Should not be present for {status} session"),
    )


@pytest.mark.parametrize("status", ["ACTIVE", "PENDING"])
def test_session_open_status_without_end(session_payload, status):  # pylint: disable=redefined-outer-name
    session_payload["status"] = status
    del session_payload["end_date_time"]
    del session_payload["total_cost"]

    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is True


def test_session_invalid_status_has_no_constraints(session_payload):  # pylint: disable=redefined-outer-name
    session_payload["status"] = "INVALID"
    del session_payload["total_cost"]

    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is True


@pytest.mark.parametrize(
    "end, expect_valid",
    [("2024-01-15T10:00:01Z", True), ("2024-01-15T10:00:00Z", False), ("2024-01-15T09:00:00Z", False)],
    ids=["later", "equal", "earlier"],
)
def test_session_end_after_start(session_payload, end, expect_valid):  # pylint: disable=redefined-outer-name
    session_payload["end_date_time"] = end
    session_payload["charging_periods"] = session_payload["charging_periods"][:1]

    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is expect_valid
    if not expect_valid:
        assert result.errors == (
            ValidationError.invalid_value("end_date_time", "Must be later than start_date_time"),
        )


def test_session_end_compares_instants_across_offsets(session_payload):  # pylint: disable=redefined-outer-name
    """10:30+01:00 is 09:30Z, earlier than the 10:00Z start."""
    session_payload["end_date_time"] = "2024-01-15T10:30:00+01:00"
    session_payload["charging_periods"] = session_payload["charging_periods"][:1]

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (
        ValidationError.invalid_value("end_date_time", "Must be later than start_date_time"),
    )


@pytest.mark.parametrize(
    "currency, expected",
    [
        ("eur", ValidationError.invalid_value("currency", "Invalid ISO 4217 currency code")),
        ("EURO", ValidationError.invalid_value("currency", "Invalid ISO 4217 currency code")),
        ("", ValidationError.missing_required_field("currency")),
    ],
)
def test_session_currency(session_payload, currency, expected):  # pylint: disable=redefined-outer-name
    session_payload["currency"] = currency

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (expected,)


@pytest.mark.parametrize("field", ["kwh", "total_cost"])
def test_session_negative_amounts(session_payload, field):  # pylint: disable=redefined-outer-name
    session_payload[field] = -1

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (
        ValidationError.invalid_value(field, "Must be greater than or equal to 0"),
    )


def test_session_rejects_flat_dimension(session_payload):  # pylint: disable=redefined-outer-name
    session_payload["charging_periods"][0]["dimensions"].append({"type": "FLAT", "volume": 1})

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (
        ValidationError.invalid_value(
            "charging_periods[0].dimensions[3].type", "FLAT dimension type is not allowed in Sessions"
        ),
    )


def test_session_charging_periods_out_of_order(session_payload):  # pylint: disable=redefined-outer-name
    session_payload["charging_periods"][1]["start_date_time"] = "2024-01-15T10:00:00Z"

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (
        ValidationError.invalid_value(
            "charging_periods[1].start_date_time", "Charging periods must be in chronological order"
        ),
    )


def test_session_charging_period_without_dimensions(session_payload):  # pylint: disable=redefined-outer-name
    session_payload["charging_periods"][1]["dimensions"] = []

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (
        ValidationError.missing_required_field("charging_periods[1].dimensions"),
    )


@pytest.mark.parametrize(
    "kind, volume, expect_valid",
    [
        ("SOC", 0, True),
        ("SOC", 100, True),
        ("SOC", 100.5, False),
        ("SOC", -1, False),
        ("POWER_FACTOR", -1, True),
        ("POWER_FACTOR", 1, True),
        ("POWER_FACTOR", 1.01, False),
        ("MAX_POWER", 0, False),
        ("MIN_CURRENT", 0.1, True),
        ("ENERGY", 0, True),
        ("ENERGY", -0.5, False),
        ("VOLTAGE", -230, False),
        ("CURRENT", 0, True),
    ],
)
def test_session_dimension_ranges(session_payload, kind, volume, expect_valid):  # pylint: disable=redefined-outer-name
    session_payload["charging_periods"][1]["dimensions"] = [{"type": kind, "volume": volume}]

    result = SessionValidator().validate(encode(session_payload))

    assert result.is_valid is expect_valid
    if not expect_valid:
        assert len(result.errors) == 1
        assert result.errors[0].field == "charging_periods[1].dimensions[0].volume"


def test_session_nested_location_errors_are_prefixed(session_payload):  # pylint: disable=redefined-outer-name
    session_payload["location"]["time_zone"] = "Nowhere/Land"
    session_payload["evse"]["uid"] = ""
    session_payload["connector"]["max_voltage"] = 0

    result = SessionValidator().validate(encode(session_payload))

    assert list(result.errors) == [
        ValidationError.invalid_value("location.time_zone", "Invalid time zone identifier"),
        ValidationError.missing_required_field("evse.uid"),
        ValidationError.invalid_value("connector.max_voltage", "Must be greater than 0"),
    ]


def test_session_nested_decode_errors_are_prefixed(session_payload):  # pylint: disable=redefined-outer-name
    del session_payload["location"]["city"]

    result = SessionValidator().validate(encode(session_payload))

    assert result.errors == (ValidationError.missing_required_field("location.city"),)


def test_session_rule_order(session_payload):  # pylint: disable=redefined-outer-name
    """Errors follow the fixed rule order: identifiers, currency, energy, times, status, ..."""
    session_payload["total_cost"] = -3
    session_payload["status"] = "ACTIVE"
    session_payload["kwh"] = -1
    session_payload["currency"] = "usd"
    session_payload["auth_id"] = ""

    result = SessionValidator().validate(encode(session_payload))

    assert [e.field for e in result.errors] == [
        "auth_id",
        "currency",
        "kwh",
        "end_date_time",
        "total_cost",
    ]
