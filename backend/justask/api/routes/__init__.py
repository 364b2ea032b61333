"""Blueprint registries grouped by mount point."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .questions import bp as questions_bp  # noqa: E402
from .status import bp as status_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_group_base)
API_REGISTRY: list[tuple[Blueprint, str]] = [
    (status_bp, ""),  # -> /api/status, /api/health
    (auth_bp, "/auth"),  # -> /api/auth
]

WEB_REGISTRY: list[tuple[Blueprint, str]] = [
    (users_bp, "/users"),
    (questions_bp, "/questions"),
]
