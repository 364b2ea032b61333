"""Werkzeug-backed implementation of the ``PasswordHasher`` port."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


class WerkzeugPasswordHasher:
    """Hash passwords with :func:`werkzeug.security.generate_password_hash`.

    :param method: Werkzeug method string, e.g. ``"scrypt"`` or
        ``"pbkdf2:sha256:600000"``. Digests embed their method, so changing
        it only affects newly hashed passwords.
    """

    def __init__(self, method: str = "scrypt") -> None:
        self.method = method

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self.method)

    def verify(self, password: str, digest: str) -> bool:
        if not digest:
            return False
        return check_password_hash(digest, password)
