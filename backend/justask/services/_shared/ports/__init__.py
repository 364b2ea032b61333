"""
justask.services._shared.ports
==============================

*Ports* (hexagonal interfaces) that keep the service layer independent from
concrete infrastructure.

Modules
-------
- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`, the injected ``hash`` / ``verify``
    capability used for stored credentials, plus a plain in-memory double.

Concrete adapters live under ``justask.infra``.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher, PlainTextPasswordHasher

__all__ = ["PasswordHasher", "PlainTextPasswordHasher"]
