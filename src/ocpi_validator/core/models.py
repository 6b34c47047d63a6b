"""OCPI domain model.

Immutable value records for the five validated object kinds (Location, Token,
Session, CDR, Tariff) and their shared substructures. Instances are produced
by the schema-driven decoder (see ``core/decoder.py``) and never mutated.

Conventions:
    - Attribute names match the OCPI JSON keys (``postal_code``,
      ``start_date_time``), except ``operator`` which is stored as
      ``operating_company``.
    - Optional JSON fields default to ``None``.
    - JSON arrays are stored as tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Union

from .enums import (
    AuthMethod,
    Capability,
    ConnectorFormat,
    ConnectorType,
    DayOfWeek,
    DimensionType,
    EVSEStatus,
    Facility,
    ImageCategory,
    LocationType,
    ParkingRestriction,
    PowerType,
    ReservationRestrictionType,
    SessionStatus,
    TariffDimensionType,
    TariffType,
    TokenType,
    WhitelistType,
)
from .utils import parse_decimal


# ============================================================================
# SHARED SUBSTRUCTURES
# ============================================================================


@dataclass(frozen=True)
class PlainText:
    """DisplayText given as a bare JSON string."""

    text: str


@dataclass(frozen=True)
class LocalizedText:
    """DisplayText given as a ``{"language": ..., "text": ...}`` object."""

    language: str
    text: str


DisplayText = Union[PlainText, LocalizedText]


@dataclass(frozen=True)
class GeoLocation:
    """Coordinates kept as their original decimal strings.

    Use ``latitude_value``/``longitude_value`` for range checks; they return
    None when the string is not a plain decimal number.

    Examples:
        >>> GeoLocation("37.7749", "-122.4194").longitude_value
        -122.4194
        >>> GeoLocation("north", "0").latitude_value is None
        True
    """

    latitude: str
    longitude: str

    @property
    def latitude_value(self) -> Optional[float]:
        return parse_decimal(self.latitude)

    @property
    def longitude_value(self) -> Optional[float]:
        return parse_decimal(self.longitude)


@dataclass(frozen=True)
class AdditionalGeoLocation:
    latitude: str
    longitude: str
    name: Optional[DisplayText] = None

    @property
    def latitude_value(self) -> Optional[float]:
        return parse_decimal(self.latitude)

    @property
    def longitude_value(self) -> Optional[float]:
        return parse_decimal(self.longitude)


@dataclass(frozen=True)
class Image:
    url: str
    category: ImageCategory
    type: str
    thumbnail: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class BusinessDetails:
    name: str
    website: Optional[str] = None
    logo: Optional[Image] = None


@dataclass(frozen=True)
class RegularHours:
    weekday: int
    period_begin: str
    period_end: str


@dataclass(frozen=True)
class ExceptionalPeriod:
    period_begin: datetime
    period_end: datetime


@dataclass(frozen=True)
class OpeningTimes:
    twentyfourseven: Optional[bool] = None
    regular_hours: Optional[Tuple[RegularHours, ...]] = None
    exceptional_openings: Optional[Tuple[ExceptionalPeriod, ...]] = None
    exceptional_closings: Optional[Tuple[ExceptionalPeriod, ...]] = None


@dataclass(frozen=True)
class EnergySource:
    source: str
    percentage: float


@dataclass(frozen=True)
class EnvironmentalImpact:
    category: str
    amount: float


@dataclass(frozen=True)
class EnergyMix:
    is_green_energy: bool
    energy_sources: Optional[Tuple[EnergySource, ...]] = None
    environ_impact: Optional[Tuple[EnvironmentalImpact, ...]] = None
    supplier_name: Optional[str] = None
    energy_product_name: Optional[str] = None


# ============================================================================
# LOCATION
# ============================================================================


@dataclass(frozen=True)
class StatusSchedule:
    period_begin: datetime
    status: EVSEStatus
    period_end: Optional[datetime] = None


@dataclass(frozen=True)
class Connector:
    id: str
    standard: ConnectorType
    format: ConnectorFormat
    power_type: PowerType
    max_voltage: int
    max_amperage: int
    max_electric_power: Optional[int] = None
    tariff_ids: Optional[Tuple[str, ...]] = None
    terms_and_conditions: Optional[str] = None
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class EVSE:
    uid: str
    status: EVSEStatus
    connectors: Tuple[Connector, ...]
    evse_id: Optional[str] = None
    status_schedule: Optional[Tuple[StatusSchedule, ...]] = None
    capabilities: Optional[Tuple[Capability, ...]] = None
    floor_level: Optional[str] = None
    coordinates: Optional[GeoLocation] = None
    physical_reference: Optional[str] = None
    directions: Optional[Tuple[DisplayText, ...]] = None
    parking_restrictions: Optional[Tuple[ParkingRestriction, ...]] = None
    images: Optional[Tuple[Image, ...]] = None
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class Location:
    id: str
    type: LocationType
    address: str
    city: str
    country: str
    coordinates: GeoLocation
    time_zone: str
    last_updated: datetime
    name: Optional[str] = None
    postal_code: Optional[str] = None
    related_locations: Optional[Tuple[AdditionalGeoLocation, ...]] = None
    evses: Optional[Tuple[EVSE, ...]] = None
    directions: Optional[Tuple[DisplayText, ...]] = None
    operating_company: Optional[BusinessDetails] = None
    suboperator: Optional[BusinessDetails] = None
    owner: Optional[BusinessDetails] = None
    facilities: Optional[Tuple[Facility, ...]] = None
    opening_times: Optional[OpeningTimes] = None
    charging_when_closed: Optional[bool] = None
    images: Optional[Tuple[Image, ...]] = None
    energy_mix: Optional[EnergyMix] = None


# ============================================================================
# TOKEN
# ============================================================================


@dataclass(frozen=True)
class Token:
    uid: str
    type: TokenType
    auth_id: str
    issuer: str
    valid: bool
    whitelist: WhitelistType
    last_updated: datetime
    visual_number: Optional[str] = None
    language: Optional[str] = None


# ============================================================================
# SESSION / CDR
# ============================================================================


@dataclass(frozen=True)
class Dimension:
    type: DimensionType
    volume: float


@dataclass(frozen=True)
class ChargingPeriod:
    start_date_time: datetime
    dimensions: Tuple[Dimension, ...]
    tariff_id: Optional[str] = None


@dataclass(frozen=True)
class Session:
    id: str
    start_date_time: datetime
    kwh: float
    auth_id: str
    auth_method: AuthMethod
    location: Location
    currency: str
    status: SessionStatus
    last_updated: datetime
    end_date_time: Optional[datetime] = None
    evse: Optional[EVSE] = None
    connector: Optional[Connector] = None
    meter_id: Optional[str] = None
    charging_periods: Optional[Tuple[ChargingPeriod, ...]] = None
    total_cost: Optional[float] = None


# ============================================================================
# TARIFF
# ============================================================================


@dataclass(frozen=True)
class Price:
    excl_vat: float
    incl_vat: Optional[float] = None


@dataclass(frozen=True)
class PriceComponent:
    type: TariffDimensionType
    price: float
    step_size: int
    vat: Optional[float] = None


@dataclass(frozen=True)
class TariffRestrictions:
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    min_kwh: Optional[float] = None
    max_kwh: Optional[float] = None
    min_current: Optional[float] = None
    max_current: Optional[float] = None
    min_power: Optional[float] = None
    max_power: Optional[float] = None
    min_duration: Optional[int] = None
    max_duration: Optional[int] = None
    day_of_week: Optional[Tuple[DayOfWeek, ...]] = None
    reservation: Optional[ReservationRestrictionType] = None


@dataclass(frozen=True)
class TariffElement:
    price_components: Tuple[PriceComponent, ...]
    restrictions: Optional[TariffRestrictions] = None


@dataclass(frozen=True)
class Tariff:
    id: str
    currency: str
    country_code: str
    party_id: str
    elements: Tuple[TariffElement, ...]
    last_updated: datetime
    type: Optional[TariffType] = None
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None
    energy_mix: Optional[EnergyMix] = None
    min_price: Optional[Price] = None
    max_price: Optional[Price] = None


@dataclass(frozen=True)
class CDR:
    id: str
    start_date_time: datetime
    end_date_time: datetime
    auth_id: str
    auth_method: AuthMethod
    location: Location
    currency: str
    charging_periods: Tuple[ChargingPeriod, ...]
    total_cost: float
    total_energy: float
    total_time: float
    last_updated: datetime
    evse: Optional[EVSE] = None
    connector: Optional[Connector] = None
    meter_id: Optional[str] = None
    tariffs: Optional[Tuple[Tariff, ...]] = None
    total_parking_time: Optional[float] = None
    remark: Optional[str] = None


__all__ = [
    "PlainText",
    "LocalizedText",
    "DisplayText",
    "GeoLocation",
    "AdditionalGeoLocation",
    "Image",
    "BusinessDetails",
    "RegularHours",
    "ExceptionalPeriod",
    "OpeningTimes",
    "EnergySource",
    "EnvironmentalImpact",
    "EnergyMix",
    "StatusSchedule",
    "Connector",
    "EVSE",
    "Location",
    "Token",
    "Dimension",
    "ChargingPeriod",
    "Session",
    "Price",
    "PriceComponent",
    "TariffRestrictions",
    "TariffElement",
    "Tariff",
    "CDR",
]
