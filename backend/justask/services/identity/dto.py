# justask/services/identity/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from justask.models.user import User


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for account registration.

    :param username: Display name (trimmed before storage).
    :param phone: Eight digit phone number.
    :param password: Raw password (at least six characters).
    """

    username: str
    phone: str
    password: str


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    username: str
    phone: str
    password: str


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public view of a user; never carries the password digest."""

    id: int
    username: str
    phone: str
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            username=user.username,
            phone=user.phone,
            created_at=user.created_at,
        )
