"""Factories for user-related models."""

from __future__ import annotations

import factory

from justask.core.config import TestingConfig
from justask.core.extensions import db
from justask.infra.security import WerkzeugPasswordHasher
from justask.models.user import User

from . import SQLAlchemyFactory, faker

HASHER = WerkzeugPasswordHasher(TestingConfig.PASSWORD_HASH_METHOD)
DEFAULT_PASSWORD = "secret1"


class UserFactory(SQLAlchemyFactory):
    """Factory for :class:`justask.models.user.User`.

    Pass ``raw_password=...`` to choose the password; the hash is computed
    with the same method the testing app uses.
    """

    class Meta:
        model = User
        sqlalchemy_session = db.session

    class Params:
        raw_password = DEFAULT_PASSWORD

    username = factory.Sequence(lambda n: f"{faker.first_name().lower()}{n}")
    phone = factory.Sequence(lambda n: f"{20000000 + n:08d}")
    password_hash = factory.LazyAttribute(lambda o: HASHER.hash(o.raw_password))
