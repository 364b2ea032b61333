"""Centralized JSON error handling for the API.

Every failure leaves the app in the same envelope::

    {"success": false, "message": "...", "code": "...", "requestId": "..."}

Field validation failures add an ``errors`` mapping of per-field messages.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from justask.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        429: "too_many_requests",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def _envelope(
    *,
    code: str,
    message: str,
    errors: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build the failure body shared by every handler.

    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional per-field validation messages.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    body: dict[str, Any] = {"success": False, "message": message, "code": code}
    if errors:
        body["errors"] = errors
    body["requestId"] = ensure_request_id()
    return body


def _error_response(body: dict[str, Any], status: int) -> tuple[Response, int]:
    return jsonify(body), int(status)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, typically snake_case. Defaults to
        ``"bad_request"``.
    errors : dict[str, Any] | None, optional
        Optional per-field messages included in the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        errors: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.errors = errors or {}

    def to_envelope(self) -> dict[str, Any]:
        return _envelope(code=self.code, message=self.message, errors=self.errors or None)


# Domain conveniences
class BadRequest(APIError):
    """400 for malformed or incomplete input."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    """400 for uniqueness collisions and repeated one-shot interactions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="conflict")


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the failure envelope for all handled errors.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    - Service-layer errors are translated through
      :meth:`justask.services._shared.base.BaseService.translate_exceptions`
      so handlers that forget to wrap a call still answer correctly.
    """
    from justask.services._shared.base import BaseService
    from justask.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        body = err.to_envelope()
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "APIError: code=%s status=%s msg=%s path=%s",
            err.code,
            err.status_code,
            err.message,
            request.path,
        )
        return _error_response(body, err.status_code)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = BaseService().translate_exceptions(err)
        return handle_api_error(translated)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        # Werkzeug descriptions are written for HTML pages; normalize for clients
        message = (err.description or error_code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: code=%s status=%s detail=%s", error_code, status, message)
        return _error_response(_envelope(code=error_code, message=message), status)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
        body = _envelope(
            code="validation_error",
            message=_first_message(messages) or "Validation failed",
            errors=messages,
        )
        log.warning("ValidationError: fields=%s", sorted(messages))
        return _error_response(body, HTTPStatus.BAD_REQUEST)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB error to clients
        log.warning("IntegrityError: %s", err.orig)
        body = _envelope(code="conflict", message="Resource conflict")
        return _error_response(body, HTTPStatus.BAD_REQUEST)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError", exc_info=True)
        body = _envelope(code="service_unavailable", message="Service temporarily unavailable")
        return _error_response(body, HTTPStatus.SERVICE_UNAVAILABLE)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Never leak internal details
        log.error("Unhandled exception", exc_info=True)
        body = _envelope(code="internal_server_error", message="Server error")
        return _error_response(body, HTTPStatus.INTERNAL_SERVER_ERROR)


def _first_message(messages: dict[str, Any]) -> str | None:
    """Return the first leaf message of a Marshmallow error mapping."""
    for value in messages.values():
        if isinstance(value, list) and value:
            return str(value[0])
        if isinstance(value, dict):
            nested = _first_message(value)
            if nested:
                return nested
        if isinstance(value, str):
            return value
    return None


__all__ = [
    "APIError",
    "BadRequest",
    "NotFound",
    "Conflict",
    "Unauthorized",
    "init_app",
]
