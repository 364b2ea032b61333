"""Mobile authentication endpoints (bearer tokens)."""

from __future__ import annotations

from flask import Blueprint

from justask.api.deps import auth_service, json_body, json_response, require_identity, timing
from justask.schemas import (
    AuthPayloadSchema,
    CredentialsSchema,
    IdentitySchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
)
from justask.services.auth import Identity
from justask.services.identity import CredentialsIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
credentials_schema = CredentialsSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
auth_payload_schema = AuthPayloadSchema()
identity_schema = IdentitySchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return a token pair for it."""

    data = register_schema.load(json_body())
    result = auth_service().register(RegisterIn(**data))
    return json_response(
        {
            "success": True,
            "message": "Registration successful",
            "data": auth_payload_schema.dump(result),
        }
    )


@bp.post("/login")
@timing
def login():
    """Authenticate username + phone + password and issue a token pair."""

    data = credentials_schema.load(json_body())
    result = auth_service().login(CredentialsIn(**data))
    return json_response(
        {
            "success": True,
            "message": "Login successful",
            "data": auth_payload_schema.dump(result),
        }
    )


@bp.post("/refresh")
@timing
def refresh():
    data = refresh_schema.load(json_body())
    access_token = auth_service().refresh(data["refresh_token"])
    return json_response({"success": True, "data": {"accessToken": access_token}})


@bp.post("/logout")
@timing
def logout():
    """Revoke the given refresh token. Succeeds with or without one."""

    data = logout_schema.load(json_body())
    auth_service().logout(data["refresh_token"])
    return json_response({"success": True, "message": "Logged out successfully"})


@bp.get("/me")
@require_identity
@timing
def me(identity: Identity):
    return json_response({"success": True, "data": identity_schema.dump(identity)})
