"""HS256 token issuance and verification with separate access/refresh keys."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from justask.services.tokens.dto import (
    AccessClaims,
    InvalidReason,
    InvalidToken,
    RefreshClaims,
    TokenSubject,
)

log = logging.getLogger(__name__)

ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issue and verify access and refresh tokens.

    Access tokens carry exactly ``{id, username, phone, iat, exp}``; refresh
    tokens carry exactly ``{id, iat, exp}``. Each kind is signed with its own
    key, so one can never be presented as the other.

    Verification never raises for untrusted input: it returns the claims or
    an :class:`InvalidToken` with the reason. Expiry is checked against the
    injected ``clock`` rather than the process wall clock.

    :param access_secret: HMAC key for access tokens.
    :param refresh_secret: HMAC key for refresh tokens; must differ.
    :param access_ttl: Access token lifetime.
    :param refresh_ttl: Refresh token lifetime.
    :param clock: Returns the current aware UTC datetime.
    :raises ValueError: If a key is empty or both keys are equal.
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=30),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Token signing keys must be non-empty.")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh signing keys must differ.")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def _window(self, ttl: timedelta) -> tuple[int, int]:
        now = self.clock()
        return int(now.timestamp()), int((now + ttl).timestamp())

    def issue_access(self, user: TokenSubject) -> str:
        iat, exp = self._window(self.access_ttl)
        payload = {
            "id": int(user.id),
            "username": user.username,
            "phone": user.phone,
            "iat": iat,
            "exp": exp,
        }
        return jwt.encode(payload, self._access_secret, algorithm=ALGORITHM)

    def issue_refresh(self, user: TokenSubject) -> str:
        iat, exp = self._window(self.refresh_ttl)
        payload = {"id": int(user.id), "iat": iat, "exp": exp}
        return jwt.encode(payload, self._refresh_secret, algorithm=ALGORITHM)

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify_access(self, token: str | None) -> AccessClaims | InvalidToken:
        payload = self._decode(token, self._access_secret)
        if isinstance(payload, InvalidToken):
            return payload
        try:
            claims = AccessClaims(
                id=_as_int(payload["id"]),
                username=_as_str(payload["username"]),
                phone=_as_str(payload["phone"]),
                iat=_as_int(payload["iat"]),
                exp=_as_int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            return InvalidToken(InvalidReason.MALFORMED)
        return self._check_expiry(claims)

    def verify_refresh(self, token: str | None) -> RefreshClaims | InvalidToken:
        """Verify a refresh token's signature, shape and expiry.

        Revocation is not consulted here; callers check the registry first.
        """
        payload = self._decode(token, self._refresh_secret)
        if isinstance(payload, InvalidToken):
            return payload
        try:
            claims = RefreshClaims(
                id=_as_int(payload["id"]),
                iat=_as_int(payload["iat"]),
                exp=_as_int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            return InvalidToken(InvalidReason.MALFORMED)
        return self._check_expiry(claims)

    def _decode(self, token: str | None, secret: str) -> dict[str, Any] | InvalidToken:
        if not token or not isinstance(token, str):
            return InvalidToken(InvalidReason.MALFORMED)
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError:
            return InvalidToken(InvalidReason.BAD_SIGNATURE)
        except jwt.PyJWTError as exc:
            log.debug("Rejected undecodable token: %s", exc)
            return InvalidToken(InvalidReason.MALFORMED)
        if not isinstance(payload, dict):
            return InvalidToken(InvalidReason.MALFORMED)
        return payload

    def _check_expiry(
        self, claims: AccessClaims | RefreshClaims
    ) -> AccessClaims | RefreshClaims | InvalidToken:
        if claims.exp <= int(self.clock().timestamp()):
            return InvalidToken(InvalidReason.EXPIRED)
        return claims


def _as_int(value: Any) -> int:
    # bool is an int subclass but never a valid id or timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    return value


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value
