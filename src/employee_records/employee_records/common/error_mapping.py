"""Translation of domain errors into HTTP responses.

The core never knows about status codes; only this module does.
"""
from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    DomainError,
    DuplicateEmailError,
    InvalidQueryError,
    InvalidRangeError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import now_local
from .logging import get_logger

logger = get_logger("http")

_STATUS_BY_ERROR = (
    (NotFoundError, 404, "Employee Not Found"),
    (DuplicateEmailError, 409, "Duplicate Email"),
    (InvalidRangeError, 400, "Invalid Range"),
    (InvalidQueryError, 400, "Invalid Query"),
    (ValidationError, 400, "Validation Failed"),
)

INTERNAL_ERROR = (500, "Internal Server Error")


def http_status_for(exc: Exception) -> tuple[int, str]:
    """Return (status code, short error title) for an exception."""
    for error_type, status, title in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status, title
    return INTERNAL_ERROR


def error_payload(exc: Exception, *, path: str, at: datetime | None = None) -> tuple[dict, int]:
    status, title = http_status_for(exc)
    if status == INTERNAL_ERROR[0]:
        # never leak internals
        message = "An unexpected error occurred"
    else:
        message = str(exc)

    details: list[str] = []
    if isinstance(exc, ValidationError):
        details = [str(v) for v in exc.violations]

    payload = {
        "message": message,
        "error": title,
        "status": status,
        "timestamp": (at or now_local()).isoformat(timespec="seconds"),
        "path": path,
        "details": details,
    }
    return payload, status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _handle_domain_error(exc: DomainError):
        payload, status = error_payload(exc, path=request.path)
        logger.warning("request_rejected", error=payload["error"], message=payload["message"], path=request.path)
        return jsonify(payload), status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.error("unhandled_error", path=request.path, exc_info=exc)
        payload, status = error_payload(exc, path=request.path)
        return jsonify(payload), status
