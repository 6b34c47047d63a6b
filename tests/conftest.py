"""Shared pytest configuration and payload fixtures for OCPI validation tests.

Every fixture returns a fresh, valid payload as a plain dict so tests can
mutate it freely before encoding it with ``json.dumps(...).encode()``.
"""

from typing import Any, Dict

import pytest


def _connector() -> Dict[str, Any]:
    return {
        "id": "1",
        "standard": "IEC_62196_T2",
        "format": "CABLE",
        "power_type": "AC_3_PHASE",
        "max_voltage": 230,
        "max_amperage": 32,
        "max_electric_power": 22000,
        "tariff_ids": ["T1"],
        "last_updated": "2024-01-15T10:00:00Z",
    }


def _evse() -> Dict[str, Any]:
    return {
        "uid": "EVSE-1",
        "evse_id": "US*CPO*E0001",
        "status": "AVAILABLE",
        "capabilities": ["RFID_READER", "REMOTE_START_STOP_CAPABLE"],
        "connectors": [_connector()],
        "floor_level": "-1",
        "coordinates": {"latitude": "37.7750", "longitude": "-122.4195"},
        "physical_reference": "1",
        "directions": [{"language": "en", "text": "Left of the entrance"}],
        "parking_restrictions": ["EV_ONLY"],
        "last_updated": "2024-01-15T10:00:00Z",
    }


def _location() -> Dict[str, Any]:
    return {
        "id": "LOC1",
        "type": "ON_STREET",
        "name": "Main Street Charging",
        "address": "123 Main Street",
        "city": "San Francisco",
        "postal_code": "94105",
        "country": "USA",
        "coordinates": {"latitude": "37.7749", "longitude": "-122.4194"},
        "evses": [_evse()],
        "directions": ["Follow the signs"],
        "operator": {"name": "Example CPO", "website": "https://cpo.example.com"},
        "facilities": ["CAFE", "WIFI"],
        "time_zone": "America/Chicago",
        "opening_times": {
            "twentyfourseven": False,
            "regular_hours": [
                {"weekday": 1, "period_begin": "08:00", "period_end": "20:00"},
            ],
        },
        "charging_when_closed": True,
        "energy_mix": {
            "is_green_energy": True,
            "energy_sources": [{"source": "SOLAR", "percentage": 60}, {"source": "WIND", "percentage": 40}],
        },
        "last_updated": "2024-01-15T10:00:00Z",
    }


def _tariff() -> Dict[str, Any]:
    return {
        "id": "T1",
        "currency": "EUR",
        "type": "REGULAR",
        "country_code": "NL",
        "party_id": "CPO",
        "elements": [
            {
                "price_components": [
                    {"type": "ENERGY", "price": 0.25, "step_size": 1, "vat": 21.0},
                ],
                "restrictions": {
                    "start_time": "08:00",
                    "end_time": "20:00",
                    "min_kwh": 0,
                    "max_kwh": 50,
                    "day_of_week": ["MONDAY", "TUESDAY"],
                },
            },
            {
                "price_components": [
                    {"type": "PARKING_TIME", "price": 2.0, "step_size": 300},
                ],
            },
        ],
        "start_date_time": "2024-01-01T00:00:00Z",
        "end_date_time": "2024-12-31T23:59:59Z",
        "min_price": {"excl_vat": 0.5, "incl_vat": 0.6},
        "max_price": {"excl_vat": 50.0, "incl_vat": 60.5},
        "last_updated": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def connector_payload() -> Dict[str, Any]:
    return _connector()


@pytest.fixture
def location_payload() -> Dict[str, Any]:
    """A complete, valid Location."""
    return _location()


@pytest.fixture
def token_payload() -> Dict[str, Any]:
    """A valid RFID token."""
    return {
        "uid": "012345678A",
        "type": "RFID",
        "auth_id": "NL-CPO-012345-6",
        "visual_number": "DF000-2001-8999",
        "issuer": "Example MSP",
        "valid": True,
        "whitelist": "ALLOWED",
        "language": "nl",
        "last_updated": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def session_payload() -> Dict[str, Any]:
    """A valid COMPLETED session with two charging periods."""
    return {
        "id": "S1",
        "start_date_time": "2024-01-15T10:00:00Z",
        "end_date_time": "2024-01-15T12:00:00Z",
        "kwh": 15.5,
        "auth_id": "NL-CPO-012345-6",
        "auth_method": "WHITELIST",
        "location": _location(),
        "evse": _evse(),
        "connector": _connector(),
        "meter_id": "M1",
        "currency": "EUR",
        "status": "COMPLETED",
        "charging_periods": [
            {
                "start_date_time": "2024-01-15T10:00:00Z",
                "dimensions": [
                    {"type": "ENERGY", "volume": 10.0},
                    {"type": "MAX_CURRENT", "volume": 16},
                    {"type": "SOC", "volume": 45},
                ],
            },
            {
                "start_date_time": "2024-01-15T11:00:00Z",
                "dimensions": [
                    {"type": "ENERGY", "volume": 5.5},
                    {"type": "POWER_FACTOR", "volume": 0.95},
                ],
            },
        ],
        "total_cost": 4.25,
        "last_updated": "2024-01-15T12:00:00Z",
    }


@pytest.fixture
def cdr_payload() -> Dict[str, Any]:
    """A valid CDR whose totals match its charging periods (19.0 kWh, 2.0 h)."""
    return {
        "id": "CDR1",
        "start_date_time": "2024-01-15T10:00:00Z",
        "end_date_time": "2024-01-15T12:30:00Z",
        "auth_id": "NL-CPO-012345-6",
        "auth_method": "AUTH_REQUEST",
        "location": _location(),
        "evse": _evse(),
        "connector": _connector(),
        "currency": "EUR",
        "tariffs": [_tariff()],
        "charging_periods": [
            {
                "start_date_time": "2024-01-15T10:00:00Z",
                "dimensions": [
                    {"type": "ENERGY", "volume": 12.0},
                    {"type": "TIME", "volume": 1.0},
                    {"type": "FLAT", "volume": 1},
                ],
                "tariff_id": "T1",
            },
            {
                "start_date_time": "2024-01-15T11:00:00Z",
                "dimensions": [
                    {"type": "ENERGY", "volume": 7.0},
                    {"type": "TIME", "volume": 1.0},
                ],
                "tariff_id": "T1",
            },
            {
                "start_date_time": "2024-01-15T12:00:00Z",
                "dimensions": [
                    {"type": "PARKING_TIME", "volume": 0.5},
                ],
                "tariff_id": "T1",
            },
        ],
        "total_cost": 12.5,
        "total_energy": 19.0,
        "total_time": 2.0,
        "total_parking_time": 0.5,
        "last_updated": "2024-01-15T12:35:00Z",
    }


@pytest.fixture
def tariff_payload() -> Dict[str, Any]:
    return _tariff()
