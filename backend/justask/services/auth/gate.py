"""Dual-channel request identity resolution (bearer token or web session)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from justask.services.tokens import AccessClaims, InvalidToken, TokenService

BEARER_SCHEME = "bearer"


@dataclass(frozen=True, slots=True)
class SessionUser:
    """The ``{id, username, phone}`` record a web login stores in the session."""

    id: int
    username: str
    phone: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SessionUser | None:
        raw_id = data.get("id")
        if raw_id is None or isinstance(raw_id, bool):
            return None
        try:
            user_id = int(raw_id)
        except (TypeError, ValueError):
            return None
        return cls(id=user_id, username=str(data.get("username") or ""), phone=data.get("phone"))

    def to_session(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "phone": self.phone}


@dataclass(frozen=True, slots=True)
class BearerIdentity:
    claims: AccessClaims
    channel: Literal["bearer"] = "bearer"

    @property
    def id(self) -> int:
        return self.claims.id

    @property
    def username(self) -> str:
        return self.claims.username

    @property
    def phone(self) -> str | None:
        return self.claims.phone


@dataclass(frozen=True, slots=True)
class SessionIdentity:
    user: SessionUser
    channel: Literal["session"] = "session"

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.username

    @property
    def phone(self) -> str | None:
        return self.user.phone


Identity = BearerIdentity | SessionIdentity


class FailureKind(str, Enum):
    LOGIN_REQUIRED = "login_required"
    INVALID_CREDENTIALS = "invalid_credentials"


FAILURE_MESSAGES = {
    FailureKind.LOGIN_REQUIRED: "Login required to perform this action",
    FailureKind.INVALID_CREDENTIALS: "Authentication failed, please sign in again",
}


@dataclass(frozen=True, slots=True)
class AuthFailure:
    kind: FailureKind

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self.kind]


def parse_bearer(authorization: str | None) -> str | None:
    """Return the credential of a ``Bearer`` header, ``""`` if it is empty.

    Returns ``None`` when the header is absent or uses another scheme.
    """
    if not authorization:
        return None
    scheme, _, credential = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    return credential.strip()


class AuthGate:
    """
    Resolve who is calling.

    A ``Bearer`` header always wins: a bad or empty token is a failure even
    when a valid session cookie rides along. Without one, the session user is
    used. The gate never raises; the HTTP layer turns :class:`AuthFailure`
    into a 401.
    """

    def __init__(self, tokens: TokenService) -> None:
        self.tokens = tokens

    def resolve(
        self,
        authorization: str | None,
        session_user: Mapping[str, Any] | None,
    ) -> Identity | AuthFailure:
        token = parse_bearer(authorization)
        if token is not None:
            claims = self.tokens.verify_access(token)
            if isinstance(claims, InvalidToken):
                return AuthFailure(FailureKind.INVALID_CREDENTIALS)
            return BearerIdentity(claims)

        if session_user:
            user = SessionUser.from_mapping(session_user)
            if user is not None:
                return SessionIdentity(user)

        return AuthFailure(FailureKind.LOGIN_REQUIRED)
