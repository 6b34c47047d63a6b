"""Schema descriptions for OCPI objects.

Every OCPI object is described by an explicit, ordered field table: the JSON
key, the expected shape, and the model attribute it fills. Which keys are
required is kept separately in ``DEFAULT_REQUIRED_FIELDS`` so that a
deployment profile can tighten or relax it (see ``validation/config.py``).

The generic decoder in ``core/decoder.py`` walks these tables; nothing here
depends on runtime reflection of the model classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple, Type

from . import models
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


class ShapeKind(str, Enum):
    """JSON value shapes understood by the decoder."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    DATE = "date"
    ENUM = "enum"
    DISPLAY_TEXT = "display_text"
    OBJECT = "object"
    ARRAY = "array"


@dataclass(frozen=True)
class Shape:
    """Expected shape of a JSON value.

    Attributes:
        kind: The value kind.
        enum: Enumeration class for ``ENUM`` shapes.
        schema: Name of the nested schema for ``OBJECT`` shapes.
        item: Element shape for ``ARRAY`` shapes.
    """

    kind: ShapeKind
    enum: Optional[Type[Enum]] = None
    schema: Optional[str] = None
    item: Optional["Shape"] = None

    def describe(self) -> str:
        """Human-readable description used in ``InvalidFieldType`` errors.

        Examples:
            >>> Shape(ShapeKind.ARRAY, item=Shape(ShapeKind.STRING)).describe()
            'array of string'
        """
        if self.kind == ShapeKind.ENUM and self.enum is not None:
            return "one of " + ", ".join(m.value for m in self.enum)
        if self.kind == ShapeKind.OBJECT:
            return "object"
        if self.kind == ShapeKind.ARRAY and self.item is not None:
            return f"array of {self.item.describe()}"
        if self.kind == ShapeKind.TIMESTAMP:
            return "ISO 8601 date-time string"
        if self.kind == ShapeKind.DATE:
            return "ISO 8601 date string"
        if self.kind == ShapeKind.DISPLAY_TEXT:
            return "string or object with language and text"
        return self.kind.value


# Shape shorthands for the field tables below
STRING = Shape(ShapeKind.STRING)
NUMBER = Shape(ShapeKind.NUMBER)
INTEGER = Shape(ShapeKind.INTEGER)
BOOLEAN = Shape(ShapeKind.BOOLEAN)
TIMESTAMP = Shape(ShapeKind.TIMESTAMP)
DATE = Shape(ShapeKind.DATE)
DISPLAY_TEXT = Shape(ShapeKind.DISPLAY_TEXT)


def enum_of(enum: Type[Enum]) -> Shape:
    return Shape(ShapeKind.ENUM, enum=enum)


def obj(schema: str) -> Shape:
    return Shape(ShapeKind.OBJECT, schema=schema)


def array_of(item: Shape) -> Shape:
    return Shape(ShapeKind.ARRAY, item=item)


@dataclass(frozen=True)
class FieldSpec:
    """One entry in a schema's field table.

    Attributes:
        key: JSON key.
        shape: Expected value shape.
        attr: Model attribute name; defaults to ``key``.
    """

    key: str
    shape: Shape
    attr: Optional[str] = None

    @property
    def attribute(self) -> str:
        return self.attr or self.key


@dataclass(frozen=True)
class Schema:
    """Decoding description for one OCPI object.

    Attributes:
        name: Schema name (``location``, ``evse``...), used by profiles.
        factory: Model constructor receiving one keyword per field.
        fields: Ordered field table.
        required: JSON keys that must be present and non-null.
    """

    name: str
    factory: Callable[..., object]
    fields: Tuple[FieldSpec, ...]
    required: FrozenSet[str] = field(default_factory=frozenset)

    def keys(self) -> Tuple[str, ...]:
        return tuple(f.key for f in self.fields)

    def is_required(self, key: str) -> bool:
        return key in self.required


# ============================================================================
# FIELD TABLES
# ============================================================================
# Order matters: decode errors are reported in field-table order.

FIELD_TABLES: Dict[str, Tuple[Callable[..., object], Tuple[FieldSpec, ...]]] = {
    "geo_location": (
        models.GeoLocation,
        (
            FieldSpec("latitude", STRING),
            FieldSpec("longitude", STRING),
        ),
    ),
    "additional_geo_location": (
        models.AdditionalGeoLocation,
        (
            FieldSpec("latitude", STRING),
            FieldSpec("longitude", STRING),
            FieldSpec("name", DISPLAY_TEXT),
        ),
    ),
    "image": (
        models.Image,
        (
            FieldSpec("url", STRING),
            FieldSpec("thumbnail", STRING),
            FieldSpec("category", enum_of(ImageCategory)),
            FieldSpec("type", STRING),
            FieldSpec("width", INTEGER),
            FieldSpec("height", INTEGER),
        ),
    ),
    "business_details": (
        models.BusinessDetails,
        (
            FieldSpec("name", STRING),
            FieldSpec("website", STRING),
            FieldSpec("logo", obj("image")),
        ),
    ),
    "regular_hours": (
        models.RegularHours,
        (
            FieldSpec("weekday", INTEGER),
            FieldSpec("period_begin", STRING),
            FieldSpec("period_end", STRING),
        ),
    ),
    "exceptional_period": (
        models.ExceptionalPeriod,
        (
            FieldSpec("period_begin", TIMESTAMP),
            FieldSpec("period_end", TIMESTAMP),
        ),
    ),
    "opening_times": (
        models.OpeningTimes,
        (
            FieldSpec("twentyfourseven", BOOLEAN),
            FieldSpec("regular_hours", array_of(obj("regular_hours"))),
            FieldSpec("exceptional_openings", array_of(obj("exceptional_period"))),
            FieldSpec("exceptional_closings", array_of(obj("exceptional_period"))),
        ),
    ),
    "energy_source": (
        models.EnergySource,
        (
            FieldSpec("source", STRING),
            FieldSpec("percentage", NUMBER),
        ),
    ),
    "environmental_impact": (
        models.EnvironmentalImpact,
        (
            FieldSpec("category", STRING),
            FieldSpec("amount", NUMBER),
        ),
    ),
    "energy_mix": (
        models.EnergyMix,
        (
            FieldSpec("is_green_energy", BOOLEAN),
            FieldSpec("energy_sources", array_of(obj("energy_source"))),
            FieldSpec("environ_impact", array_of(obj("environmental_impact"))),
            FieldSpec("supplier_name", STRING),
            FieldSpec("energy_product_name", STRING),
        ),
    ),
    "status_schedule": (
        models.StatusSchedule,
        (
            FieldSpec("period_begin", TIMESTAMP),
            FieldSpec("period_end", TIMESTAMP),
            FieldSpec("status", enum_of(EVSEStatus)),
        ),
    ),
    "connector": (
        models.Connector,
        (
            FieldSpec("id", STRING),
            FieldSpec("standard", enum_of(ConnectorType)),
            FieldSpec("format", enum_of(ConnectorFormat)),
            FieldSpec("power_type", enum_of(PowerType)),
            FieldSpec("max_voltage", INTEGER),
            FieldSpec("max_amperage", INTEGER),
            FieldSpec("max_electric_power", INTEGER),
            FieldSpec("tariff_ids", array_of(STRING)),
            FieldSpec("terms_and_conditions", STRING),
            FieldSpec("last_updated", TIMESTAMP),
        ),
    ),
    "evse": (
        models.EVSE,
        (
            FieldSpec("uid", STRING),
            FieldSpec("evse_id", STRING),
            FieldSpec("status", enum_of(EVSEStatus)),
            FieldSpec("status_schedule", array_of(obj("status_schedule"))),
            FieldSpec("capabilities", array_of(enum_of(Capability))),
            FieldSpec("connectors", array_of(obj("connector"))),
            FieldSpec("floor_level", STRING),
            FieldSpec("coordinates", obj("geo_location")),
            FieldSpec("physical_reference", STRING),
            FieldSpec("directions", array_of(DISPLAY_TEXT)),
            FieldSpec("parking_restrictions", array_of(enum_of(ParkingRestriction))),
            FieldSpec("images", array_of(obj("image"))),
            FieldSpec("last_updated", TIMESTAMP),
        ),
    ),
    "location": (
        models.Location,
        (
            FieldSpec("id", STRING),
            FieldSpec("type", enum_of(LocationType)),
            FieldSpec("name", STRING),
            FieldSpec("address", STRING),
            FieldSpec("city", STRING),
            FieldSpec("postal_code", STRING),
            FieldSpec("country", STRING),
            FieldSpec("coordinates", obj("geo_location")),
            FieldSpec("related_locations", array_of(obj("additional_geo_location"))),
            FieldSpec("evses", array_of(obj("evse"))),
            FieldSpec("directions", array_of(DISPLAY_TEXT)),
            FieldSpec("operator", obj("business_details"), attr="operating_company"),
            FieldSpec("suboperator", obj("business_details")),
            FieldSpec("owner", obj("business_details")),
            FieldSpec("facilities", array_of(enum_of(Facility))),
            FieldSpec("time_zone", STRING),
            FieldSpec("opening_times", obj("opening_times")),
            FieldSpec("charging_when_closed", BOOLEAN),
            FieldSpec("images", array_of(obj("image"))),
            FieldSpec("energy_mix", obj("energy_mix")),
            FieldSpec("last_updated", TIMESTAMP),
        ),
    ),
    "token": (
        models.Token,
        (
            FieldSpec("uid", STRING),
            FieldSpec("type", enum_of(TokenType)),
            FieldSpec("auth_id", STRING),
            FieldSpec("visual_number", STRING),
            FieldSpec("issuer", STRING),
            FieldSpec("valid", BOOLEAN),
            FieldSpec("whitelist", enum_of(WhitelistType)),
            FieldSpec("language", STRING),
            FieldSpec("last_updated", TIMESTAMP),
        ),
    ),
    "dimension": (
        models.Dimension,
        (
            FieldSpec("type", enum_of(DimensionType)),
            FieldSpec("volume", NUMBER),
        ),
    ),
    "charging_period": (
        models.ChargingPeriod,
        (
            FieldSpec("start_date_time", TIMESTAMP),
            FieldSpec("dimensions", array_of(obj("dimension"))),
            FieldSpec("tariff_id", STRING),
        ),
    ),
    "session": (
        models.Session,
        (
            FieldSpec("id", STRING),
            FieldSpec("start_date_time", TIMESTAMP),
            FieldSpec("end_date_time", TIMESTAMP),
            FieldSpec("kwh", NUMBER),
            FieldSpec("auth_id", STRING),
            FieldSpec("auth_method", enum_of(AuthMethod)),
            FieldSpec("location", obj("location")),
            FieldSpec("evse", obj("evse")),
            FieldSpec("connector", obj("connector")),
            FieldSpec("meter_id", STRING),
            FieldSpec("currency", STRING),
            FieldSpec("status", enum_of(SessionStatus)),
            FieldSpec("last_updated", TIMESTAMP),
            FieldSpec("charging_periods", array_of(obj("charging_period"))),
            FieldSpec("total_cost", NUMBER),
        ),
    ),
    "price": (
        models.Price,
        (
            FieldSpec("excl_vat", NUMBER),
            FieldSpec("incl_vat", NUMBER),
        ),
    ),
    "price_component": (
        models.PriceComponent,
        (
            FieldSpec("type", enum_of(TariffDimensionType)),
            FieldSpec("price", NUMBER),
            FieldSpec("step_size", INTEGER),
            FieldSpec("vat", NUMBER),
        ),
    ),
    "tariff_restrictions": (
        models.TariffRestrictions,
        (
            FieldSpec("start_time", STRING),
            FieldSpec("end_time", STRING),
            FieldSpec("start_date", DATE),
            FieldSpec("end_date", DATE),
            FieldSpec("min_kwh", NUMBER),
            FieldSpec("max_kwh", NUMBER),
            FieldSpec("min_current", NUMBER),
            FieldSpec("max_current", NUMBER),
            FieldSpec("min_power", NUMBER),
            FieldSpec("max_power", NUMBER),
            FieldSpec("min_duration", INTEGER),
            FieldSpec("max_duration", INTEGER),
            FieldSpec("day_of_week", array_of(enum_of(DayOfWeek))),
            FieldSpec("reservation", enum_of(ReservationRestrictionType)),
        ),
    ),
    "tariff_element": (
        models.TariffElement,
        (
            FieldSpec("price_components", array_of(obj("price_component"))),
            FieldSpec("restrictions", obj("tariff_restrictions")),
        ),
    ),
    "tariff": (
        models.Tariff,
        (
            FieldSpec("id", STRING),
            FieldSpec("currency", STRING),
            FieldSpec("type", enum_of(TariffType)),
            FieldSpec("country_code", STRING),
            FieldSpec("party_id", STRING),
            FieldSpec("elements", array_of(obj("tariff_element"))),
            FieldSpec("last_updated", TIMESTAMP),
            FieldSpec("start_date_time", TIMESTAMP),
            FieldSpec("end_date_time", TIMESTAMP),
            FieldSpec("energy_mix", obj("energy_mix")),
            FieldSpec("min_price", obj("price")),
            FieldSpec("max_price", obj("price")),
        ),
    ),
    "cdr": (
        models.CDR,
        (
            FieldSpec("id", STRING),
            FieldSpec("start_date_time", TIMESTAMP),
            FieldSpec("end_date_time", TIMESTAMP),
            FieldSpec("auth_id", STRING),
            FieldSpec("auth_method", enum_of(AuthMethod)),
            FieldSpec("location", obj("location")),
            FieldSpec("evse", obj("evse")),
            FieldSpec("connector", obj("connector")),
            FieldSpec("meter_id", STRING),
            FieldSpec("currency", STRING),
            FieldSpec("tariffs", array_of(obj("tariff"))),
            FieldSpec("charging_periods", array_of(obj("charging_period"))),
            FieldSpec("total_cost", NUMBER),
            FieldSpec("total_energy", NUMBER),
            FieldSpec("total_time", NUMBER),
            FieldSpec("total_parking_time", NUMBER),
            FieldSpec("remark", STRING),
            FieldSpec("last_updated", TIMESTAMP),
        ),
    ),
}


# ============================================================================
# REQUIRED FIELDS (default profile)
# ============================================================================
# Schemas not listed here have no required keys.

DEFAULT_REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    "geo_location": ("latitude", "longitude"),
    "additional_geo_location": ("latitude", "longitude"),
    "image": ("url", "category", "type"),
    "business_details": ("name",),
    "regular_hours": ("weekday", "period_begin", "period_end"),
    "exceptional_period": ("period_begin", "period_end"),
    "energy_source": ("source", "percentage"),
    "environmental_impact": ("category", "amount"),
    "energy_mix": ("is_green_energy",),
    "status_schedule": ("period_begin", "status"),
    "connector": ("id", "standard", "format", "power_type", "max_voltage", "max_amperage"),
    "evse": ("uid", "status", "connectors"),
    "location": (
        "id",
        "type",
        "address",
        "city",
        "country",
        "coordinates",
        "time_zone",
        "last_updated",
    ),
    "token": ("uid", "type", "auth_id", "issuer", "valid", "whitelist", "last_updated"),
    "dimension": ("type", "volume"),
    "charging_period": ("start_date_time", "dimensions"),
    "session": (
        "id",
        "start_date_time",
        "kwh",
        "auth_id",
        "auth_method",
        "location",
        "currency",
        "status",
        "last_updated",
    ),
    "price": ("excl_vat",),
    "price_component": ("type", "price", "step_size"),
    "tariff_element": ("price_components",),
    "tariff": ("id", "currency", "country_code", "party_id", "elements", "last_updated"),
    "cdr": (
        "id",
        "start_date_time",
        "end_date_time",
        "auth_id",
        "auth_method",
        "location",
        "currency",
        "charging_periods",
        "total_cost",
        "total_energy",
        "total_time",
        "last_updated",
    ),
}


def get_required_fields(schema_name: str) -> Tuple[str, ...]:
    """Get the default required JSON keys for a schema.

    Raises:
        ValueError: If the schema name is unknown.

    Examples:
        >>> "time_zone" in get_required_fields("location")
        True
        >>> "name" in get_required_fields("location")
        False
    """
    if schema_name not in FIELD_TABLES:
        raise ValueError(f"Unknown schema: {schema_name}")
    return DEFAULT_REQUIRED_FIELDS.get(schema_name, ())


def build_schemas(
    required_overrides: Optional[Mapping[str, Sequence[str]]] = None,
) -> Dict[str, Schema]:
    """Build the full schema set, optionally overriding required keys.

    Args:
        required_overrides: Mapping of schema name to the complete list of
            required keys for that schema. Schemas not mentioned keep their
            defaults.

    Returns:
        Mapping of schema name to Schema.

    Raises:
        ValueError: If an override names an unknown schema or a key that the
            schema does not define.
    """
    overrides = dict(required_overrides or {})
    for name, keys in overrides.items():
        if name not in FIELD_TABLES:
            raise ValueError(
                f"Unknown schema '{name}' in required fields. "
                f"Valid schemas: {', '.join(sorted(FIELD_TABLES))}"
            )
        known = {f.key for f in FIELD_TABLES[name][1]}
        unknown = [k for k in keys if k not in known]
        if unknown:
            raise ValueError(
                f"Unknown field(s) for schema '{name}': {', '.join(unknown)}"
            )

    schemas: Dict[str, Schema] = {}
    for name, (factory, fields) in FIELD_TABLES.items():
        required = overrides.get(name, DEFAULT_REQUIRED_FIELDS.get(name, ()))
        schemas[name] = Schema(
            name=name,
            factory=factory,
            fields=fields,
            required=frozenset(required),
        )
    return schemas


__all__ = [
    "ShapeKind",
    "Shape",
    "FieldSpec",
    "Schema",
    "FIELD_TABLES",
    "DEFAULT_REQUIRED_FIELDS",
    "get_required_fields",
    "build_schemas",
]
