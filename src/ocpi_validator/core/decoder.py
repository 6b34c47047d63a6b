"""Schema-driven decoding of OCPI JSON payloads.

Turns raw bytes into typed model instances by walking the field tables in
``core/schemas.py``. Every structural problem is collected as a
path-qualified ``ValidationError``:

- Unparsable input, invalid UTF-8 or a non-object top level: one
  ``INVALID_JSON`` error and nothing else.
- Missing required key, or a required key holding ``null``:
  ``MISSING_REQUIRED_FIELD``.
- Present value of the wrong shape: ``INVALID_FIELD_TYPE``.

Errors come out in field-table order, recursing into nested objects and
arrays (ascending index) as they are met. If any error is found, no entity
is returned.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ocpi_validator.validation.models import ValidationError
from .models import LocalizedText, PlainText
from .schemas import Schema, Shape, ShapeKind, build_schemas
from .utils import index_path, join_path, parse_date, parse_timestamp

logger = logging.getLogger(__name__)

Decoded = Tuple[Any, List[ValidationError]]

_DEFAULT_SCHEMAS: Dict[str, Schema] = build_schemas()


def default_schemas() -> Dict[str, Schema]:
    """Schema set built from the default required-field profile."""
    return _DEFAULT_SCHEMAS


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    # 1e999 overflows to inf
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def parse_json(data: Union[bytes, bytearray, str]) -> Any:
    """Parse JSON text, reading bytes strictly as UTF-8.

    Raises:
        ValueError: If the input is not valid UTF-8 JSON (``UnicodeDecodeError``
            and ``json.JSONDecodeError`` are both ``ValueError`` subclasses),
            or holds a number that overflows a float.
        RecursionError: If the input nests deeper than the parser allows.
    """
    text = bytes(data).decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)


def decode_payload(
    data: Union[bytes, bytearray, str],
    schema_name: str,
    schemas: Optional[Mapping[str, Schema]] = None,
) -> Tuple[Optional[Any], List[ValidationError]]:
    """Decode a raw payload into a model instance.

    Args:
        data: Raw payload, bytes (UTF-8) or already-decoded text.
        schema_name: Top-level schema (``location``, ``token``...).
        schemas: Schema set to use; defaults to the default profile.

    Returns:
        ``(entity, [])`` on success, ``(None, errors)`` otherwise.

    Examples:
        >>> entity, errors = decode_payload(b"not json", "token")
        >>> entity is None, [e.message for e in errors]
        (True, ['Invalid JSON format'])
    """
    schemas = schemas if schemas is not None else default_schemas()
    try:
        raw = parse_json(data)
    except (ValueError, RecursionError):
        logger.debug("Payload for %s is not valid JSON", schema_name)
        return None, [ValidationError.invalid_json()]
    if not isinstance(raw, dict):
        logger.debug("Payload for %s is not a JSON object", schema_name)
        return None, [ValidationError.invalid_json()]

    entity, errors = decode_object(raw, schemas[schema_name], "", schemas)
    if errors:
        logger.debug("Decoding %s produced %d error(s)", schema_name, len(errors))
        return None, errors
    return entity, []


def decode_object(
    raw: Mapping[str, Any],
    schema: Schema,
    path: str,
    schemas: Mapping[str, Schema],
) -> Decoded:
    """Decode a JSON object against a schema, collecting errors in field order."""
    errors: List[ValidationError] = []
    kwargs: Dict[str, Any] = {}
    for spec in schema.fields:
        field_path = join_path(path, spec.key)
        value = raw.get(spec.key)
        if value is None:
            if schema.is_required(spec.key):
                errors.append(ValidationError.missing_required_field(field_path))
            kwargs[spec.attribute] = None
            continue
        decoded, field_errors = decode_value(value, spec.shape, field_path, schemas)
        errors.extend(field_errors)
        kwargs[spec.attribute] = decoded

    if errors:
        return None, errors
    return schema.factory(**kwargs), []


def decode_value(
    value: Any,
    shape: Shape,
    path: str,
    schemas: Mapping[str, Schema],
) -> Decoded:
    """Decode one non-null JSON value against a shape."""
    kind = shape.kind

    if kind == ShapeKind.OBJECT:
        if not isinstance(value, dict):
            return None, [ValidationError.invalid_field_type(path, shape.describe())]
        return decode_object(value, schemas[shape.schema], path, schemas)

    if kind == ShapeKind.ARRAY:
        if not isinstance(value, list):
            return None, [ValidationError.invalid_field_type(path, shape.describe())]
        items: List[Any] = []
        errors: List[ValidationError] = []
        for i, item in enumerate(value):
            item_path = index_path(path, i)
            if item is None:
                errors.append(
                    ValidationError.invalid_field_type(item_path, shape.item.describe())
                )
                continue
            decoded, item_errors = decode_value(item, shape.item, item_path, schemas)
            errors.extend(item_errors)
            items.append(decoded)
        if errors:
            return None, errors
        return tuple(items), []

    if kind == ShapeKind.DISPLAY_TEXT:
        return _decode_display_text(value, shape, path)

    decoded = _decode_scalar(value, shape)
    if decoded is None:
        return None, [ValidationError.invalid_field_type(path, shape.describe())]
    return decoded, []


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _decode_scalar(value: Any, shape: Shape) -> Any:
    """Return the decoded scalar, or None when the value does not fit the shape."""
    kind = shape.kind
    if kind == ShapeKind.STRING:
        return value if isinstance(value, str) else None
    if kind == ShapeKind.BOOLEAN:
        return value if isinstance(value, bool) else None
    if kind == ShapeKind.NUMBER:
        if not _is_number(value):
            return None
        try:
            return float(value)
        except OverflowError:
            return None
    if kind == ShapeKind.INTEGER:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value if _is_number(value) and isinstance(value, int) else None
    if kind in (ShapeKind.TIMESTAMP, ShapeKind.DATE):
        if not isinstance(value, str):
            return None
        parse = parse_timestamp if kind == ShapeKind.TIMESTAMP else parse_date
        try:
            return parse(value)
        except ValueError:
            return None
    if kind == ShapeKind.ENUM:
        if not (isinstance(value, str) or _is_number(value)):
            return None
        try:
            return shape.enum(value)
        except ValueError:
            return None
    raise ValueError(f"Unsupported shape kind: {kind}")


def _decode_display_text(value: Any, shape: Shape, path: str) -> Decoded:
    if isinstance(value, str):
        return PlainText(text=value), []
    if not isinstance(value, dict):
        return None, [ValidationError.invalid_field_type(path, shape.describe())]

    errors: List[ValidationError] = []
    for key in ("language", "text"):
        item = value.get(key)
        if item is None:
            errors.append(ValidationError.missing_required_field(join_path(path, key)))
        elif not isinstance(item, str):
            errors.append(ValidationError.invalid_field_type(join_path(path, key), "string"))
    if errors:
        return None, errors
    return LocalizedText(language=value["language"], text=value["text"]), []


__all__ = [
    "decode_payload",
    "decode_object",
    "decode_value",
    "default_schemas",
    "parse_json",
]
