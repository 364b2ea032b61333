"""Account registration and credential checks shared by web and mobile flows."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from justask.models.user import PHONE_PATTERN, User
from justask.services._shared.base import BaseService
from justask.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from justask.services._shared.ports import PasswordHasher
from justask.services.identity.dto import CredentialsIn, RegisterIn, UserOut

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

USERNAME_TAKEN = "This username is already taken"
PHONE_TAKEN = "This phone number is already registered"


class IdentityService(BaseService):
    """
    Create accounts and check credentials.

    Passwords are hashed through the injected :class:`PasswordHasher`; the
    service never sees the hashing primitive itself.
    """

    def __init__(self, *, hasher: PasswordHasher) -> None:
        super().__init__()
        self.hasher = hasher

    def register(self, dto: RegisterIn) -> UserOut:
        """
        Create a user after validating input and uniqueness.

        :raises ServiceError: On missing fields, bad phone, or short password.
        :raises ConflictError: When the username or phone is already in use.
        """
        username = (dto.username or "").strip()
        if not username or not dto.phone or not dto.password:
            raise ServiceError("All fields are required")
        if len(username) > 50:
            raise ServiceError("Username must be at most 50 characters")
        if not PHONE_PATTERN.match(dto.phone):
            raise ServiceError("Phone number must be exactly 8 digits")
        if len(dto.password) < MIN_PASSWORD_LENGTH:
            raise ServiceError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_username(username):
                    raise ConflictError(USERNAME_TAKEN, entity="User")
                if uow.users.exists_by_phone(dto.phone):
                    raise ConflictError(PHONE_TAKEN, entity="User")
                user = uow.users.add(
                    User(
                        username=username,
                        phone=dto.phone,
                        password_hash=self.hasher.hash(dto.password),
                    )
                )
                out = UserOut.from_model(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name/phone.
            if violates(exc, "uq_users_phone") or violates(exc, "users.phone"):
                raise ConflictError(PHONE_TAKEN, entity="User") from exc
            raise ConflictError(USERNAME_TAKEN, entity="User") from exc

        log.info("Registered user", extra={"user_id": out.id})
        return out

    def authenticate(self, dto: CredentialsIn) -> UserOut:
        """
        Return the user matching the username, phone and password.

        :raises ServiceError: If a field is missing.
        :raises AuthenticationError: On unknown username/phone pair or wrong password.
        """
        if not dto.username or not dto.phone or not dto.password:
            raise ServiceError("All fields are required")

        with self.ro_uow() as uow:
            user = uow.users.get_by_username_and_phone(dto.username, dto.phone)
            if user is None:
                raise AuthenticationError("Incorrect username or phone number")
            if not self.hasher.verify(dto.password, user.password_hash):
                raise AuthenticationError("Incorrect password")
            return UserOut.from_model(user)

    def get(self, user_id: int) -> UserOut:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserOut.from_model(user)
