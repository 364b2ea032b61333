"""Global pytest fixtures for the JustAsk API."""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

os.environ.setdefault("APP_ENV", "testing")

from justask import create_app  # noqa: E402
from justask.core import components  # noqa: E402
from justask.core.config import TestingConfig  # noqa: E402
from justask.core.extensions import db  # noqa: E402
from justask.models import User  # noqa: E402
from justask.services.revocation import RevocationRegistry  # noqa: E402
from justask.services.tokens import TokenService  # noqa: E402

from tests.factories.user import UserFactory  # noqa: E402
from tests.helpers.auth import bearer  # noqa: E402


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a fresh application with an empty in-memory database.

    A new app per test also means a new revocation registry, so logouts never
    leak between cases.
    """

    application = create_app(TestingConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def file_app(tmp_path) -> Generator[Flask, None, None]:
    """Application on a file-backed SQLite database, for tests that use threads.

    The in-memory database is a single shared connection, so real
    concurrency needs a file.
    """

    class FileConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'justask.db'}"

    application = create_app(FileConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a Flask test client (cookie jar included)."""

    return app.test_client()


@pytest.fixture()
def tokens(app: Flask) -> TokenService:
    return components.get_tokens()


@pytest.fixture()
def revocations(app: Flask) -> RevocationRegistry:
    return components.get_revocations()


@pytest.fixture()
def user(app: Flask) -> User:
    """Persist and return a user whose password is ``secret1``."""

    return UserFactory()


@pytest.fixture()
def access_token(tokens: TokenService, user: User) -> str:
    return tokens.issue_access(user)


@pytest.fixture()
def auth_header(access_token: str) -> dict[str, str]:
    """Authorization header for bearer-authenticated requests."""

    return bearer(access_token)


@pytest.fixture()
def login_session(client: FlaskClient) -> Callable[[User], None]:
    """Return a helper that plants ``user`` in the client's web session."""

    def _login(u: User) -> None:
        with client.session_transaction() as sess:
            sess["user"] = {"id": u.id, "username": u.username, "phone": u.phone}

    return _login


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01") as frozen:
    ...         frozen.tick(60)
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
