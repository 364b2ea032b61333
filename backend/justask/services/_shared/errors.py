"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, ledgers and application services.

The translation to HTTP responses is handled by ``justask/core/errors.py``
via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the offending
    columns (``UNIQUE constraint failed: users.username``), so callers may
    pass either form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g. ``uq_users_username``) or ``table.column``.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The message must be safe to show to clients.
    - The API layer or BaseService translates them to APIError (400 unless a
      subclass says otherwise).
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Question").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or a one-shot rule is violated.

    :param detail: Short human-readable explanation.
    :type detail: str
    :param entity: Entity name (e.g., "User"), used for logging only.
    :type entity: str | None
    """

    detail: str
    entity: str | None = None

    def __str__(self) -> str:
        return self.detail


class AuthenticationError(ServiceError):
    """Raised when credentials or tokens do not identify a user."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)
