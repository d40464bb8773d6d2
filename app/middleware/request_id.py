"""Request ID and timing middleware.

Every request gets an X-Request-ID (the client's, or a fresh UUID) bound
into the structlog context, so the relay's upstream logs can be matched
to the chat request that caused them. The same ID is echoed on the
response, and each request's status and duration are logged.

Usage:
    from app.middleware.request_id import init_request_id_middleware
    init_request_id_middleware(app)
"""
from __future__ import annotations

import time
import uuid

import structlog
from flask import Flask, g, request

REQUEST_ID_HEADER = "X-Request-ID"


def init_request_id_middleware(app: Flask) -> None:
    """Register before/after hooks for request tracing.

    Args:
        app: Flask application instance.
    """
    logger = structlog.get_logger(__name__)

    @app.before_request
    def bind_request_context() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        g.request_start = time.monotonic()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )

    @app.after_request
    def log_request(response):
        response.headers[REQUEST_ID_HEADER] = g.get("request_id", "unknown")

        start = g.get("request_start")
        duration_ms = round((time.monotonic() - start) * 1000) if start else None
        logger.info("request_completed", status=response.status_code, duration_ms=duration_ms)
        return response
