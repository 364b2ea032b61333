"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request, session

from justask.core import components
from justask.core.errors import Unauthorized
from justask.services.auth import AuthFailure, AuthService
from justask.services.identity import IdentityService
from justask.services.questions import QuestionService
from justask.services.thanks import ThanksLedger

F = TypeVar("F", bound=Callable[..., Any])

SESSION_USER_KEY = "user"


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def json_body() -> dict[str, Any]:
    """Return the JSON object body, or ``{}`` when absent or not an object."""

    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


def require_identity(func: F) -> F:
    """Resolve the caller through the auth gate and pass it as ``identity=``.

    Raises :class:`Unauthorized` (401) when the gate reports a failure.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        result = components.get_gate().resolve(
            request.headers.get("Authorization"),
            session.get(SESSION_USER_KEY),
        )
        if isinstance(result, AuthFailure):
            raise Unauthorized(result.message)
        kwargs["identity"] = result
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# ------------------------------ Service builders ------------------------------


def identity_service() -> IdentityService:
    return IdentityService(hasher=components.get_hasher())


def auth_service() -> AuthService:
    return AuthService(
        identity=identity_service(),
        tokens=components.get_tokens(),
        revocations=components.get_revocations(),
    )


def question_service() -> QuestionService:
    return QuestionService()


def thanks_ledger() -> ThanksLedger:
    return ThanksLedger()
