"""Unit tests for the validator registry and dispatcher."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ocpi_validator import validate as package_validate
from ocpi_validator.core.enums import ObjectType
from ocpi_validator.core.schemas import build_schemas
from ocpi_validator.validation.checks.location import LocationValidator
from ocpi_validator.validation.models import ErrorKind, ValidationError, ValidationResult
from ocpi_validator.validation.registry import (
    ALL_VALIDATORS,
    build_validators,
    print_report,
    validate,
    validate_files,
)


def encode(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_registry_covers_every_object_type():
    assert {v.object_type for v in ALL_VALIDATORS} == set(ObjectType)


@pytest.mark.parametrize(
    "object_type, fixture_name",
    [
        (ObjectType.LOCATION, "location_payload"),
        (ObjectType.TOKEN, "token_payload"),
        (ObjectType.SESSION, "session_payload"),
        (ObjectType.CDR, "cdr_payload"),
        (ObjectType.TARIFF, "tariff_payload"),
    ],
)
def test_validate_dispatches_valid_payloads(request, object_type, fixture_name):
    payload = request.getfixturevalue(fixture_name)

    assert validate(encode(payload), object_type).is_valid is True


def test_validate_accepts_type_names(token_payload):  # pylint: disable=redefined-outer-name
    assert validate(encode(token_payload), "TOKEN").is_valid is True
    assert package_validate(encode(token_payload), "token").is_valid is True


def test_validate_unknown_type_name():
    with pytest.raises(ValueError):
        validate(b"{}", "charger")


def test_validate_wrong_type_reports_structure_errors(token_payload):  # pylint: disable=redefined-outer-name
    result = validate(encode(token_payload), ObjectType.LOCATION)

    assert result.is_valid is False
    assert ValidationError.missing_required_field("id") in result.errors


def test_validate_without_registered_validator(location_payload):  # pylint: disable=redefined-outer-name
    validators = [v for v in ALL_VALIDATORS if v.object_type != ObjectType.LOCATION]

    result = validate(encode(location_payload), ObjectType.LOCATION, validators)

    assert result.is_valid is False
    assert result.errors == (ValidationError.not_implemented(),)
    assert result.errors[0].kind == ErrorKind.NOT_IMPLEMENTED


def test_validate_uses_given_validators():
    mock_validator = MagicMock()
    mock_validator.object_type = ObjectType.TARIFF
    mock_validator.validate.return_value = ValidationResult.from_errors([])

    result = validate(b"{}", ObjectType.TARIFF, [mock_validator])

    assert result.is_valid is True
    mock_validator.validate.assert_called_once_with(b"{}")


def test_build_validators_with_profile(location_payload):  # pylint: disable=redefined-outer-name
    del location_payload["time_zone"]
    schemas = build_schemas({"location": ["id", "type", "address", "city", "country", "coordinates"]})

    strict = validate(encode(location_payload), ObjectType.LOCATION)
    relaxed = validate(encode(location_payload), ObjectType.LOCATION, build_validators(schemas))

    assert strict.errors == (ValidationError.missing_required_field("time_zone"),)
    assert relaxed.is_valid is True


def test_validate_files(tmp_path: Path, location_payload):  # pylint: disable=redefined-outer-name
    good = tmp_path / "good.json"
    good.write_bytes(encode(location_payload))
    del location_payload["address"]
    bad = tmp_path / "bad.json"
    bad.write_bytes(encode(location_payload))

    report = validate_files([good, bad], "location")

    assert [item.source for item in report.results] == [str(good), str(bad)]
    assert [item.is_valid for item in report.results] == [True, False]
    assert report.results[1].result.errors == (ValidationError.missing_required_field("address"),)
    assert report.results[0].object_type == ObjectType.LOCATION


def test_validate_files_missing_file_checked_first(tmp_path: Path, location_payload):  # pylint: disable=redefined-outer-name
    good = tmp_path / "good.json"
    good.write_bytes(encode(location_payload))

    with patch("ocpi_validator.validation.registry.validate") as mock_validate:
        with pytest.raises(FileNotFoundError, match="missing.json"):
            validate_files([good, tmp_path / "missing.json"], ObjectType.LOCATION)
        mock_validate.assert_not_called()


def test_validate_files_invalid_json(tmp_path: Path):
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    report = validate_files([broken], ObjectType.CDR)

    assert report.results[0].result.errors == (ValidationError.invalid_json(),)


def test_print_report(tmp_path: Path, location_payload, capsys):  # pylint: disable=redefined-outer-name
    del location_payload["city"]
    bad = tmp_path / "bad.json"
    bad.write_bytes(encode(location_payload))

    print_report(validate_files([bad], ObjectType.LOCATION))

    out = capsys.readouterr().out
    assert "Payloads: 1 validated (0 valid, 1 invalid)" in out
    assert f"❌ {bad} (location): 1 errors" in out
    assert "   - Missing required field: city" in out


def test_print_report_all_valid(tmp_path: Path, token_payload, capsys):  # pylint: disable=redefined-outer-name
    good = tmp_path / "token.json"
    good.write_bytes(encode(token_payload))

    print_report(validate_files([good], ObjectType.TOKEN))

    assert "✅ All payloads are valid!" in capsys.readouterr().out


def test_validator_instances_are_reusable(location_payload):  # pylint: disable=redefined-outer-name
    validator = LocationValidator()
    data = encode(location_payload)

    first = validator.validate(data)
    validator.validate(b"[]")

    assert validator.validate(data) == first
