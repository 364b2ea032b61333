"""User model definition for the Q&A forum."""

from __future__ import annotations

import re

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from justask.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

PHONE_PATTERN = re.compile(r"^\d{8}$")


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Forum account. Never deleted by the application.

    Fields
    ------
    username : str
        Public display name, trimmed, 1-50 characters. Unique.
    phone : str
        Exactly eight digits. Unique; doubles as the second login factor.
    password_hash : str
        Digest produced by the configured ``PasswordHasher``.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(8), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("phone", name="uq_users_phone"),
    )

    # -------------------- Validators --------------------
    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Normalize and validate username.

        :raises ValueError: If username is missing, blank or too long.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip()
        if not v:
            raise ValueError("Username is required.")
        if len(v) > 50:
            raise ValueError("Username must be at most 50 characters.")
        return v

    @validates("phone")
    def _validate_phone(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not PHONE_PATTERN.match(value):
            raise ValueError("Phone must be exactly 8 digits.")
        return value
