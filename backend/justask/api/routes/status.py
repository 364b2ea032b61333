"""Status and health endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from justask.api.deps import SESSION_USER_KEY, json_response, timing
from justask.core.extensions import db

bp = Blueprint("status", __name__)


@bp.get("/status")
@timing
def status():
    """Report that the API is up, with the web session user if any."""

    return json_response(
        {
            "success": True,
            "message": "Backend API is working!",
            "user": session.get(SESSION_USER_KEY),
        }
    )


@bp.get("/health")
@timing
def healthcheck():
    """Return application and database health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    finally:
        db.session.rollback()
    version = current_app.config.get("APP_VERSION", "dev")
    payload = {"success": db_status == "ok", "status": "ok", "db": db_status, "version": version}
    return json_response(payload, status=200 if db_status == "ok" else 503)
