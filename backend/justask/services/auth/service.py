# justask/services/auth/service.py
from __future__ import annotations

import logging

from justask.services._shared.base import BaseService
from justask.services._shared.errors import AuthenticationError, NotFoundError, ServiceError
from justask.services.auth.dto import AuthResult
from justask.services.identity import CredentialsIn, IdentityService, RegisterIn, UserOut
from justask.services.revocation import RevocationRegistry
from justask.services.tokens import InvalidToken, TokenService

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Mobile authentication lifecycle (register / login / refresh / logout).

    Tokens are stateless; the only server state is the
    :class:`RevocationRegistry`, which is consulted on refresh *before*
    signature verification so a revoked token is refused even while it is
    still cryptographically valid.
    """

    def __init__(
        self,
        *,
        identity: IdentityService,
        tokens: TokenService,
        revocations: RevocationRegistry,
    ) -> None:
        super().__init__()
        self.identity = identity
        self.tokens = tokens
        self.revocations = revocations

    def _issue_pair(self, user: UserOut) -> AuthResult:
        return AuthResult(
            access_token=self.tokens.issue_access(user),
            refresh_token=self.tokens.issue_refresh(user),
            user=user,
        )

    def register(self, dto: RegisterIn) -> AuthResult:
        """Create the account and sign the new user in."""
        return self._issue_pair(self.identity.register(dto))

    def login(self, dto: CredentialsIn) -> AuthResult:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises ServiceError: If a field is missing.
        :raises AuthenticationError: If the credentials do not match.
        """
        user = self.identity.authenticate(dto)
        log.info("User signed in", extra={"user_id": user.id})
        return self._issue_pair(user)

    def refresh(self, refresh_token: str | None) -> str:
        """
        Exchange a refresh token for a new access token.

        The refresh token itself is not rotated.

        :raises ServiceError: If no token is given.
        :raises AuthenticationError: If the token is revoked, invalid,
            expired, or its user no longer exists.
        """
        if not refresh_token:
            raise ServiceError("Refresh token is required")

        if self.revocations.is_revoked(refresh_token):
            raise AuthenticationError("Token has been revoked, please sign in again")

        claims = self.tokens.verify_refresh(refresh_token)
        if isinstance(claims, InvalidToken):
            log.info("Refresh rejected: %s", claims.reason.value)
            raise AuthenticationError("Token is invalid or expired, please sign in again")

        try:
            user = self.identity.get(claims.id)
        except NotFoundError as exc:
            raise AuthenticationError("User no longer exists") from exc

        return self.tokens.issue_access(user)

    def logout(self, refresh_token: str | None) -> None:
        """Revoke ``refresh_token`` when given. Always succeeds."""
        if refresh_token:
            self.revocations.revoke(refresh_token)
