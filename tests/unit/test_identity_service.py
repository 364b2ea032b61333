"""Unit tests for :class:`IdentityService`."""

from __future__ import annotations

import pytest

from justask.core.extensions import db
from justask.models import User
from justask.services._shared.errors import AuthenticationError, ConflictError, ServiceError
from justask.services._shared.ports import PlainTextPasswordHasher
from justask.services.identity import CredentialsIn, IdentityService, RegisterIn

from tests.factories.user import UserFactory


@pytest.fixture()
def service(app) -> IdentityService:
    return IdentityService(hasher=PlainTextPasswordHasher())


def test_register_hashes_and_trims(service: IdentityService) -> None:
    out = service.register(RegisterIn(username="  alice ", phone="55512345", password="secret1"))

    stored = db.session.get(User, out.id)
    assert out.username == "alice"
    assert stored.password_hash == "plain$secret1"


@pytest.mark.parametrize(
    ("dto", "message"),
    [
        (RegisterIn("", "55512345", "secret1"), "All fields are required"),
        (RegisterIn("alice", "5551234", "secret1"), "Phone number must be exactly 8 digits"),
        (RegisterIn("alice", "5551234a", "secret1"), "Phone number must be exactly 8 digits"),
        (RegisterIn("alice", "55512345", "12345"), "Password must be at least 6 characters"),
    ],
)
def test_register_validation(service: IdentityService, dto: RegisterIn, message: str) -> None:
    with pytest.raises(ServiceError) as exc:
        service.register(dto)

    assert str(exc.value) == message


def test_register_duplicate_username(service: IdentityService) -> None:
    UserFactory(username="alice", phone="11111111")

    with pytest.raises(ConflictError) as exc:
        service.register(RegisterIn("alice", "55512345", "secret1"))

    assert "username" in str(exc.value)


def test_register_duplicate_phone(service: IdentityService) -> None:
    UserFactory(username="carol", phone="55512345")

    with pytest.raises(ConflictError) as exc:
        service.register(RegisterIn("alice", "55512345", "secret1"))

    assert "phone" in str(exc.value)


def test_authenticate_success(service: IdentityService) -> None:
    created = service.register(RegisterIn("alice", "55512345", "secret1"))

    out = service.authenticate(CredentialsIn("alice", "55512345", "secret1"))

    assert out.id == created.id


def test_authenticate_unknown_pair(service: IdentityService) -> None:
    service.register(RegisterIn("alice", "55512345", "secret1"))

    with pytest.raises(AuthenticationError):
        service.authenticate(CredentialsIn("alice", "55500000", "secret1"))


def test_authenticate_wrong_password(service: IdentityService) -> None:
    service.register(RegisterIn("alice", "55512345", "secret1"))

    with pytest.raises(AuthenticationError) as exc:
        service.authenticate(CredentialsIn("alice", "55512345", "nope!!"))

    assert str(exc.value) == "Incorrect password"
