"""JustAsk Q&A backend.

Provide convenient access to :func:`justask.factory.create_app` so callers can
``from justask import create_app``.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
