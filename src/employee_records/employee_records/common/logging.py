"""Structured logging for the employee records service.

JSON output in production, colored console output in development. Every
record carries the service name and, inside a request, its correlation id.
"""
from __future__ import annotations

import logging
import sys
import time
import uuid
from typing import Optional

import structlog
from flask import Flask, g, request

CORRELATION_HEADER = "X-Correlation-ID"


def configure_logging(service_name: str, log_level: str = "INFO", json_logs: bool = True) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context(service_name),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    # werkzeug logs every request line on its own
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def add_service_context(service_name: str):
    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def register_request_logging(app: Flask) -> None:
    """Bind a correlation id per request and log each completed request."""

    logger = get_logger("http")

    @app.before_request
    def _bind_request_context():
        correlation_id = (
            request.headers.get(CORRELATION_HEADER)
            or request.headers.get("X-Request-ID")
            or generate_correlation_id()
        )
        g.correlation_id = correlation_id
        g.request_started = time.perf_counter()
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        duration_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        response.headers[CORRELATION_HEADER] = g.get("correlation_id", "")
        logger.info(
            "request_completed",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    @app.teardown_request
    def _unbind_request_context(exc):
        structlog.contextvars.clear_contextvars()
