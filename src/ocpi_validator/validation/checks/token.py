"""Token validation.

Besides non-empty identifiers, tokens are checked for type-specific formats
(RFID hex UIDs, app-user e-mail auth ids) and for whitelist consistency with
the token's type and validity.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Union

from ocpi_validator.core.enums import ObjectType, TokenType, WhitelistType
from ocpi_validator.core.models import Token
from ocpi_validator.core.schemas import Schema
from ..models import ValidationError, ValidationResult
from ..rules import (
    EMAIL_PATTERN,
    LANGUAGE_PATTERN,
    RFID_UID_PATTERN,
    check_non_empty,
    check_pattern,
)
from . import run_phases

# Whitelist types that let a token be used without online authorization
_OFFLINE_WHITELISTS = frozenset({WhitelistType.ALWAYS, WhitelistType.ALLOWED_OFFLINE})


def check_identifiers(token: Token) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for key in ("uid", "auth_id", "issuer"):
        errors += check_non_empty(getattr(token, key), key)
    return errors


def check_type_format(token: Token) -> List[ValidationError]:
    """Type-specific rules for RFID, APP_USER and AD_HOC_USER tokens."""
    if token.type == TokenType.RFID:
        errors: List[ValidationError] = []
        if not token.visual_number:
            errors.append(ValidationError.missing_required_field("visual_number"))
        errors += check_pattern(token.uid, RFID_UID_PATTERN, "uid", "Invalid RFID uid format")
        return errors
    if token.type == TokenType.APP_USER:
        return check_pattern(
            token.auth_id, EMAIL_PATTERN, "auth_id", "Invalid app user auth_id format"
        )
    if token.type == TokenType.AD_HOC_USER and token.whitelist in _OFFLINE_WHITELISTS:
        return [
            ValidationError.invalid_value(
                "whitelist", "Ad-hoc users cannot have ALWAYS or ALLOWED_OFFLINE whitelist type"
            )
        ]
    return []


def check_whitelist(token: Token) -> List[ValidationError]:
    """Whitelist must agree with the token's validity.

    Examples:
        >>> from datetime import datetime, timezone
        >>> token = Token("A1", TokenType.OTHER, "A1", "CPO", False,
        ...               WhitelistType.ALWAYS, datetime.now(timezone.utc))
        >>> [e.field for e in check_whitelist(token)]
        ['whitelist']
    """
    errors: List[ValidationError] = []
    if token.valid is False and token.whitelist in _OFFLINE_WHITELISTS:
        errors.append(
            ValidationError.invalid_value(
                "whitelist", "Invalid tokens cannot have ALWAYS or ALLOWED_OFFLINE whitelist type"
            )
        )
    if token.whitelist == WhitelistType.NEVER and token.valid is True:
        errors.append(
            ValidationError.invalid_value("valid", "Token cannot be valid when whitelist is NEVER")
        )
    return errors


class TokenValidator:
    """Validate OCPI Token payloads."""

    object_type = ObjectType.TOKEN
    schema_name = "token"

    def __init__(self, schemas: Optional[Mapping[str, Schema]] = None) -> None:
        self.schemas = schemas

    def validate(self, data: Union[bytes, str]) -> ValidationResult:
        return run_phases(self, data)

    def check(self, entity: Token) -> List[ValidationError]:
        return (
            check_identifiers(entity)
            + check_type_format(entity)
            + check_pattern(
                entity.language, LANGUAGE_PATTERN, "language", "Invalid ISO 639-1 language code"
            )
            + check_whitelist(entity)
        )
