"""Account and authentication Marshmallow schemas (camelCase on the wire)."""

from __future__ import annotations

from typing import Any

from marshmallow import (
    EXCLUDE,
    Schema,
    ValidationError,
    fields,
    post_load,
    validate,
    validates_schema,
)

from .common import REQUIRED, StrippedSchema

PHONE_RE = r"^\d{8}$"


def _required_string(**kwargs: Any) -> fields.String:
    return fields.String(
        required=True,
        error_messages={"required": REQUIRED, "null": REQUIRED},
        **kwargs,
    )


class CredentialsSchema(StrippedSchema):
    """Input payload for login; every field must be present and non-empty."""

    username = _required_string(validate=validate.Length(min=1, error=REQUIRED))
    phone = _required_string(validate=validate.Length(min=1, error=REQUIRED))
    password = _required_string(validate=validate.Length(min=1, error=REQUIRED))


class RegisterSchema(StrippedSchema):
    """Input payload for account registration."""

    username = _required_string(
        validate=validate.Length(min=1, max=50, error="Username must be 1-50 characters")
    )
    phone = _required_string(
        validate=validate.Regexp(PHONE_RE, error="Phone number must be exactly 8 digits")
    )
    password = _required_string(
        validate=validate.Length(min=6, error="Password must be at least 6 characters")
    )


class WebRegisterSchema(RegisterSchema):
    """Web registration additionally asks for the password twice."""

    confirm_password = _required_string(data_key="confirmPassword")

    @validates_schema
    def passwords_match(self, data: dict[str, Any], **_: Any) -> None:
        if data.get("password") != data.get("confirm_password"):
            raise ValidationError("Passwords do not match", "confirmPassword")


class RefreshSchema(Schema):
    """Body of refresh and logout requests; the token may be absent."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class LogoutSchema(Schema):
    """Body of logout requests. Any value is accepted; only strings are revocable."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.Raw(data_key="refreshToken", load_default=None, allow_none=True)

    @post_load
    def keep_string_token(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        token = data.get("refresh_token")
        data["refresh_token"] = token if isinstance(token, str) else None
        return data


class UserSchema(Schema):
    """Public user representation."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    phone = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)


class AuthPayloadSchema(Schema):
    """Token pair plus the user it was issued for."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
    user = fields.Nested(UserSchema, required=True)


class IdentitySchema(Schema):
    """Resolved request identity, whichever channel produced it."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    phone = fields.String(allow_none=True)
    channel = fields.String(required=True)


class SessionUserSchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String(required=True)
    phone = fields.String(allow_none=True)
