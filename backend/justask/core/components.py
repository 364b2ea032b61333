"""Per-application construction of the auth components.

The token service, revocation registry, auth gate and password hasher are
built once in :func:`init_app` from config and stored in
``app.extensions["justask"]``. Handlers reach them through the getters below;
nothing here is a module-level singleton, so two apps in one process (tests)
never share revocations.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from justask.infra.security import WerkzeugPasswordHasher
from justask.services._shared.ports import PasswordHasher
from justask.services.auth.gate import AuthGate
from justask.services.revocation import RevocationRegistry
from justask.services.tokens import TokenService

EXTENSION_KEY = "justask"


@dataclass(slots=True)
class Components:
    tokens: TokenService
    revocations: RevocationRegistry
    gate: AuthGate
    hasher: PasswordHasher


def build_components(app: Flask) -> Components:
    """Construct the components from ``app.config``.

    :raises ValueError: If the access and refresh keys are equal.
    """
    tokens = TokenService(
        access_secret=app.config["JWT_ACCESS_SECRET"],
        refresh_secret=app.config["JWT_REFRESH_SECRET"],
        access_ttl=app.config["ACCESS_TOKEN_EXPIRES"],
        refresh_ttl=app.config["REFRESH_TOKEN_EXPIRES"],
    )
    revocations = RevocationRegistry(
        high_water=int(app.config.get("REVOCATION_HIGH_WATER", 10_000)),
        retain=int(app.config.get("REVOCATION_RETAIN", 5_000)),
    )
    return Components(
        tokens=tokens,
        revocations=revocations,
        gate=AuthGate(tokens),
        hasher=WerkzeugPasswordHasher(app.config.get("PASSWORD_HASH_METHOD", "scrypt")),
    )


def init_app(app: Flask) -> None:
    app.extensions[EXTENSION_KEY] = build_components(app)


def components() -> Components:
    return current_app.extensions[EXTENSION_KEY]


def get_tokens() -> TokenService:
    return components().tokens


def get_revocations() -> RevocationRegistry:
    return components().revocations


def get_gate() -> AuthGate:
    return components().gate


def get_hasher() -> PasswordHasher:
    return components().hasher
