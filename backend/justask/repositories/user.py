"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from justask.models.user import User
from justask.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER hashes passwords or issues tokens; only DB-level user access.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username_and_phone(self, username: str, phone: str) -> User | None:
        """Fetch the user matching both the trimmed username and phone.

        :param username: Display name as typed by the user.
        :type username: str
        :param phone: Eight digit phone number.
        :type phone: str
        :returns: User instance or ``None`` when the pair does not match.
        :rtype: User | None
        """
        stmt = select(User).where(User.username == username.strip(), User.phone == phone)
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username.strip())
        return bool(self.session.execute(stmt).first())

    def exists_by_phone(self, phone: str) -> bool:
        stmt = select(User.id).where(User.phone == phone)
        return bool(self.session.execute(stmt).first())
