from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password hashing."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, digest: str) -> bool: ...


class PlainTextPasswordHasher:
    """Reversible stand-in for unit tests; never wire this into an app."""

    PREFIX = "plain$"

    def hash(self, password: str) -> str:
        return f"{self.PREFIX}{password}"

    def verify(self, password: str, digest: str) -> bool:
        return digest == f"{self.PREFIX}{password}"
