"""Global Flask error handlers for problem-style JSON error responses.

Every error leaving the app has the same body, served as
`application/problem+json`:
    { "type": "about:blank", "title": "...", "status": <int>, "detail": "..." }

Clients only need `detail` to show a human-readable reason.

Usage:
    from app.middleware.error_handlers import register_error_handlers
    register_error_handlers(app)
"""
from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response
from werkzeug.exceptions import HTTPException

import structlog

from app.models.responses import ProblemDetail

logger = structlog.get_logger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"


def problem_response(detail: str, status: int) -> tuple[Response, int]:
    """Create a problem-style JSON error response.

    Args:
        detail: Human-readable error message.
        status: HTTP status code.

    Returns:
        Tuple of (response, status_code).
    """
    try:
        title = HTTPStatus(status).phrase
    except ValueError:
        title = "Error"
    problem = ProblemDetail(title=title, status=status, detail=detail)
    return Response(problem.model_dump_json(), mimetype=PROBLEM_MIMETYPE), status


def register_error_handlers(app: Flask) -> None:
    """Register global error handlers on the Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        """Map any Werkzeug HTTP error (404, 405, 415, ...) to a problem body."""
        return problem_response(e.description or "Unknown error", e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        """Last resort handler for unhandled exceptions."""
        logger.error(
            "unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return problem_response("An unexpected error occurred", 500)
