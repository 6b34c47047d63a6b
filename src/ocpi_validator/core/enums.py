"""Core enumerations used across the package.

OCPI enumerations come in two flavours:

- **Closed**: only the listed values are accepted; anything else is a decode
  error (e.g. ``SessionStatus``, ``DimensionType``).
- **Open**: the enumeration carries an ``OTHER``/``UNKNOWN`` catch-all and
  unrecognised values map to it, so newer OCPI values do not break decoding
  (e.g. ``LocationType``, ``TokenType``).

Values are strings to ease serialization and CLI interchange, and lookups are
case-insensitive.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class OcpiEnum(str, Enum):
    """Base class for OCPI string enumerations.

    Enumerations listed in ``OPEN_ENUM_FALLBACKS`` are open: unrecognised
    values decode to their catch-all member.
    """

    @classmethod
    def fallback(cls) -> Optional["OcpiEnum"]:
        name = OPEN_ENUM_FALLBACKS.get(cls.__name__)
        return cls[name] if name else None

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            upper = value.upper()
            for member in cls:
                if member.value == upper:
                    return member
            return cls.fallback()
        return None

    @classmethod
    def choices(cls) -> str:
        return ", ".join(m.value for m in cls)


class ObjectType(str, Enum):
    """The five OCPI object kinds the engine can validate."""

    LOCATION = "location"
    TARIFF = "tariff"
    SESSION = "session"
    CDR = "cdr"
    TOKEN = "token"

    @classmethod
    def parse(cls, value: str) -> "ObjectType":
        """Parse a type selector, ignoring case.

        Raises:
            ValueError: If the selector names no supported object type.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(
                f"Unknown object type: '{value}'. Supported types: {valid}"
            ) from None


class LocationType(OcpiEnum):
    ON_STREET = "ON_STREET"
    PARKING_GARAGE = "PARKING_GARAGE"
    UNDERGROUND_GARAGE = "UNDERGROUND_GARAGE"
    PARKING_LOT = "PARKING_LOT"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


class Facility(OcpiEnum):
    HOTEL = "HOTEL"
    RESTAURANT = "RESTAURANT"
    CAFE = "CAFE"
    MALL = "MALL"
    SUPERMARKET = "SUPERMARKET"
    SPORT = "SPORT"
    RECREATION_AREA = "RECREATION_AREA"
    NATURE = "NATURE"
    MUSEUM = "MUSEUM"
    BIKE_SHARING = "BIKE_SHARING"
    BUS_STOP = "BUS_STOP"
    TAXI_STAND = "TAXI_STAND"
    TRAM_STOP = "TRAM_STOP"
    METRO_STATION = "METRO_STATION"
    TRAIN_STATION = "TRAIN_STATION"
    AIRPORT = "AIRPORT"
    PARKING_LOT = "PARKING_LOT"
    CARPOOL_PARKING = "CARPOOL_PARKING"
    FUEL_STATION = "FUEL_STATION"
    WIFI = "WIFI"
    OTHER = "OTHER"


class ImageCategory(OcpiEnum):
    CHARGER = "CHARGER"
    ENTRANCE = "ENTRANCE"
    LOCATION = "LOCATION"
    NETWORK = "NETWORK"
    OPERATOR = "OPERATOR"
    OTHER = "OTHER"
    OWNER = "OWNER"


class EVSEStatus(OcpiEnum):
    AVAILABLE = "AVAILABLE"
    BLOCKED = "BLOCKED"
    CHARGING = "CHARGING"
    INOPERATIVE = "INOPERATIVE"
    OUT_OF_ORDER = "OUT_OF_ORDER"
    PLANNED = "PLANNED"
    REMOVED = "REMOVED"
    RESERVED = "RESERVED"
    UNKNOWN = "UNKNOWN"


class Capability(OcpiEnum):
    CHARGING_PROFILE_CAPABLE = "CHARGING_PROFILE_CAPABLE"
    CHARGING_PREFERENCES_CAPABLE = "CHARGING_PREFERENCES_CAPABLE"
    CHIP_CARD_SUPPORT = "CHIP_CARD_SUPPORT"
    CONTACTLESS_CARD_SUPPORT = "CONTACTLESS_CARD_SUPPORT"
    CREDIT_CARD_PAYABLE = "CREDIT_CARD_PAYABLE"
    DEBIT_CARD_PAYABLE = "DEBIT_CARD_PAYABLE"
    PED_TERMINAL = "PED_TERMINAL"
    REMOTE_START_STOP_CAPABLE = "REMOTE_START_STOP_CAPABLE"
    RESERVABLE = "RESERVABLE"
    RFID_READER = "RFID_READER"
    TOKEN_GROUP_CAPABLE = "TOKEN_GROUP_CAPABLE"
    UNLOCK_CAPABLE = "UNLOCK_CAPABLE"
    # Pre-2.2 names still seen in the wild
    CHARGING = "CHARGING"
    UNLOCK_CONNECTOR = "UNLOCK_CONNECTOR"
    CREDIT_CARD = "CREDIT_CARD"
    REMOTE = "REMOTE"


class ParkingRestriction(OcpiEnum):
    EV_ONLY = "EV_ONLY"
    EV = "EV"
    PLUGGED = "PLUGGED"
    PLUGGED_IN = "PLUGGED_IN"
    DISABLED = "DISABLED"
    CUSTOMERS = "CUSTOMERS"
    MOTORCYCLES = "MOTORCYCLES"


class ConnectorType(OcpiEnum):
    CHADEMO = "CHADEMO"
    CHAOJI = "CHAOJI"
    DOMESTIC_A = "DOMESTIC_A"
    DOMESTIC_B = "DOMESTIC_B"
    DOMESTIC_C = "DOMESTIC_C"
    DOMESTIC_D = "DOMESTIC_D"
    DOMESTIC_E = "DOMESTIC_E"
    DOMESTIC_F = "DOMESTIC_F"
    DOMESTIC_G = "DOMESTIC_G"
    DOMESTIC_H = "DOMESTIC_H"
    DOMESTIC_I = "DOMESTIC_I"
    DOMESTIC_J = "DOMESTIC_J"
    DOMESTIC_K = "DOMESTIC_K"
    DOMESTIC_L = "DOMESTIC_L"
    GBT_AC = "GBT_AC"
    GBT_DC = "GBT_DC"
    IEC_60309_2_SINGLE_16 = "IEC_60309_2_SINGLE_16"
    IEC_60309_2_THREE_16 = "IEC_60309_2_THREE_16"
    IEC_60309_2_THREE_32 = "IEC_60309_2_THREE_32"
    IEC_60309_2_THREE_64 = "IEC_60309_2_THREE_64"
    IEC_60309_2_SINGLE = "IEC_60309_2_SINGLE"
    IEC_60309_2_THREE = "IEC_60309_2_THREE"
    IEC_62196_T1 = "IEC_62196_T1"
    IEC_62196_T1_COMBO = "IEC_62196_T1_COMBO"
    IEC_62196_T2 = "IEC_62196_T2"
    IEC_62196_T2_COMBO = "IEC_62196_T2_COMBO"
    IEC_62196_T3A = "IEC_62196_T3A"
    IEC_62196_T3C = "IEC_62196_T3C"
    NEMA_5_20 = "NEMA_5_20"
    NEMA_6_30 = "NEMA_6_30"
    NEMA_6_50 = "NEMA_6_50"
    NEMA_10_30 = "NEMA_10_30"
    NEMA_10_50 = "NEMA_10_50"
    NEMA_14_30 = "NEMA_14_30"
    NEMA_14_50 = "NEMA_14_50"
    PANTOGRAPH_BOTTOM_UP = "PANTOGRAPH_BOTTOM_UP"
    PANTOGRAPH_TOP_DOWN = "PANTOGRAPH_TOP_DOWN"
    TESLA_R = "TESLA_R"
    TESLA_S = "TESLA_S"
    TYPE_1 = "TYPE_1"
    TYPE_2 = "TYPE_2"
    TYPE_3 = "TYPE_3"


class ConnectorFormat(OcpiEnum):
    SOCKET = "SOCKET"
    CABLE = "CABLE"


class PowerType(OcpiEnum):
    AC_1_PHASE = "AC_1_PHASE"
    AC_2_PHASE = "AC_2_PHASE"
    AC_2_PHASE_SPLIT = "AC_2_PHASE_SPLIT"
    AC_3_PHASE = "AC_3_PHASE"
    DC = "DC"


class TokenType(OcpiEnum):
    AD_HOC_USER = "AD_HOC_USER"
    APP_USER = "APP_USER"
    OTHER = "OTHER"
    RFID = "RFID"


class WhitelistType(OcpiEnum):
    ALWAYS = "ALWAYS"
    ALLOWED = "ALLOWED"
    ALLOWED_OFFLINE = "ALLOWED_OFFLINE"
    NEVER = "NEVER"
    NOT_ALLOWED = "NOT_ALLOWED"


class AuthMethod(OcpiEnum):
    AUTH_REQUEST = "AUTH_REQUEST"
    COMMAND = "COMMAND"
    WHITELIST = "WHITELIST"


class SessionStatus(OcpiEnum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    INVALID = "INVALID"
    PENDING = "PENDING"
    RESERVED = "RESERVED"


class DimensionType(OcpiEnum):
    CURRENT = "CURRENT"
    ENERGY = "ENERGY"
    ENERGY_EXPORT = "ENERGY_EXPORT"
    ENERGY_IMPORT = "ENERGY_IMPORT"
    MAX_CURRENT = "MAX_CURRENT"
    MIN_CURRENT = "MIN_CURRENT"
    MAX_POWER = "MAX_POWER"
    MIN_POWER = "MIN_POWER"
    PARKING_TIME = "PARKING_TIME"
    POWER = "POWER"
    POWER_FACTOR = "POWER_FACTOR"
    SOC = "SOC"
    TIME = "TIME"
    VOLTAGE = "VOLTAGE"
    # CDR only
    FLAT = "FLAT"


class TariffType(OcpiEnum):
    AD_HOC_PAYMENT = "AD_HOC_PAYMENT"
    PROFILE_CHEAP = "PROFILE_CHEAP"
    PROFILE_FAST = "PROFILE_FAST"
    PROFILE_GREEN = "PROFILE_GREEN"
    REGULAR = "REGULAR"
    OTHER = "OTHER"


class TariffDimensionType(OcpiEnum):
    ENERGY = "ENERGY"
    FLAT = "FLAT"
    PARKING_TIME = "PARKING_TIME"
    TIME = "TIME"


class DayOfWeek(OcpiEnum):
    """Day of week; also accepts ISO weekday numbers 1 (Monday) to 7."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 7:
            return list(cls)[value - 1]
        return super()._missing_(value)


class ReservationRestrictionType(OcpiEnum):
    RESERVATION = "RESERVATION"
    RESERVATION_EXPIRES = "RESERVATION_EXPIRES"


# Catch-all member per open enumeration
OPEN_ENUM_FALLBACKS: Dict[str, str] = {
    "LocationType": "UNKNOWN",
    "Facility": "OTHER",
    "ImageCategory": "OTHER",
    "EVSEStatus": "UNKNOWN",
    "TokenType": "OTHER",
    "TariffType": "OTHER",
}


__all__ = [
    "OPEN_ENUM_FALLBACKS",
    "OcpiEnum",
    "ObjectType",
    "LocationType",
    "Facility",
    "ImageCategory",
    "EVSEStatus",
    "Capability",
    "ParkingRestriction",
    "ConnectorType",
    "ConnectorFormat",
    "PowerType",
    "TokenType",
    "WhitelistType",
    "AuthMethod",
    "SessionStatus",
    "DimensionType",
    "TariffType",
    "TariffDimensionType",
    "DayOfWeek",
    "ReservationRestrictionType",
]
