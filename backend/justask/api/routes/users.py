"""Web account endpoints backed by the session cookie."""

from __future__ import annotations

from flask import Blueprint, session

from justask.api.deps import SESSION_USER_KEY, identity_service, json_body, json_response, timing
from justask.schemas import CredentialsSchema, SessionUserSchema, WebRegisterSchema
from justask.services.auth import SessionUser
from justask.services.identity import CredentialsIn, RegisterIn

bp = Blueprint("users", __name__)

web_register_schema = WebRegisterSchema()
credentials_schema = CredentialsSchema()
session_user_schema = SessionUserSchema()


@bp.post("/register")
@timing
def register():
    """Create an account; the user signs in separately."""

    data = web_register_schema.load(json_body())
    identity_service().register(
        RegisterIn(username=data["username"], phone=data["phone"], password=data["password"])
    )
    return json_response({"success": True, "message": "Registration successful, please log in"})


@bp.post("/login")
@timing
def login():
    """Check credentials and store ``{id, username, phone}`` in the session."""

    data = credentials_schema.load(json_body())
    user = identity_service().authenticate(CredentialsIn(**data))
    session.clear()
    session.permanent = True
    session[SESSION_USER_KEY] = SessionUser(
        id=user.id, username=user.username, phone=user.phone
    ).to_session()
    return json_response(
        {
            "success": True,
            "message": "Login successful",
            "user": session_user_schema.dump(session[SESSION_USER_KEY]),
        }
    )


@bp.route("/logout", methods=["GET", "POST"])
@timing
def logout():
    session.clear()
    return json_response({"success": True, "message": "Logged out successfully"})
