"""Unit tests for :class:`AuthService` (mobile token lifecycle)."""

from __future__ import annotations

import pytest

from justask.core.extensions import db
from justask.models import User
from justask.services._shared.errors import AuthenticationError, ServiceError
from justask.services._shared.ports import PlainTextPasswordHasher
from justask.services.auth import AuthService
from justask.services.identity import CredentialsIn, IdentityService, RegisterIn
from justask.services.revocation import RevocationRegistry
from justask.services.tokens import AccessClaims


@pytest.fixture()
def service(app, tokens) -> AuthService:
    return AuthService(
        identity=IdentityService(hasher=PlainTextPasswordHasher()),
        tokens=tokens,
        revocations=RevocationRegistry(),
    )


def _register(service: AuthService):
    return service.register(RegisterIn("alice", "55512345", "secret1"))


def test_register_returns_working_pair(service: AuthService, tokens) -> None:
    result = _register(service)

    claims = tokens.verify_access(result.access_token)
    assert isinstance(claims, AccessClaims)
    assert claims.id == result.user.id
    assert tokens.verify_refresh(result.refresh_token).id == result.user.id


def test_login_issues_pair(service: AuthService) -> None:
    _register(service)

    result = service.login(CredentialsIn("alice", "55512345", "secret1"))

    assert result.user.username == "alice"
    assert result.access_token != result.refresh_token


def test_refresh_requires_token(service: AuthService) -> None:
    with pytest.raises(ServiceError) as exc:
        service.refresh(None)

    assert not isinstance(exc.value, AuthenticationError)


def test_refresh_issues_access_token(service: AuthService, tokens) -> None:
    pair = _register(service)

    access = service.refresh(pair.refresh_token)

    assert tokens.verify_access(access).username == "alice"


def test_refresh_rejects_access_token(service: AuthService) -> None:
    pair = _register(service)

    with pytest.raises(AuthenticationError):
        service.refresh(pair.access_token)


def test_logout_revokes_refresh(service: AuthService) -> None:
    pair = _register(service)

    service.logout(pair.refresh_token)

    with pytest.raises(AuthenticationError) as exc:
        service.refresh(pair.refresh_token)
    assert "revoked" in str(exc.value)


def test_logout_without_token_is_noop(service: AuthService) -> None:
    service.logout(None)
    service.logout("")

    assert len(service.revocations) == 0


def test_revocation_is_checked_before_signature(service: AuthService) -> None:
    service.logout("garbage-token")

    with pytest.raises(AuthenticationError) as exc:
        service.refresh("garbage-token")
    assert "revoked" in str(exc.value)


def test_refresh_for_deleted_user(service: AuthService) -> None:
    pair = _register(service)
    db.session.delete(db.session.get(User, pair.user.id))
    db.session.commit()

    with pytest.raises(AuthenticationError) as exc:
        service.refresh(pair.refresh_token)
    assert str(exc.value) == "User no longer exists"
