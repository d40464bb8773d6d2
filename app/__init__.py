"""Gemini Chat Relay: Flask Application Package.

The `create_app()` factory wires configuration, logging, middleware,
CORS, the Gemini relay, and the blueprints into one Flask app.
"""
from __future__ import annotations

import structlog
from flask import Flask
from flask_cors import CORS

from app.config import get_settings, Settings
from app.utils.logger import setup_logging
from app.middleware.request_id import init_request_id_middleware
from app.middleware.error_handlers import register_error_handlers


def create_app(settings: Settings | None = None) -> Flask:
    """Application factory pattern.

    Creates and configures the Flask application with:
    - Pydantic-based configuration loading
    - Structured logging (structlog)
    - Request ID middleware
    - Problem-style global error handlers
    - CORS configuration
    - Gemini relay initialization
    - Blueprint registration (health, chat)

    Args:
        settings: Settings to use instead of the cached environment settings.

    Returns:
        Configured Flask application instance.
    """
    settings = settings or get_settings()

    # ── Logging (must be first so all subsequent logs are formatted) ──
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
    logger = structlog.get_logger(__name__)

    # ── Flask app ─────────────────────────────────────────────────────
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["FLASK_DEBUG"] = settings.FLASK_DEBUG
    app.config["SETTINGS"] = settings

    # ── Middleware ─────────────────────────────────────────────────────
    init_request_id_middleware(app)
    register_error_handlers(app)

    # ── CORS ──────────────────────────────────────────────────────────
    CORS(app, resources={
        r"/api/*": {"origins": settings.cors_origins},
        r"/health": {"origins": settings.cors_origins},
    })

    # ── Services ──────────────────────────────────────────────────────
    _init_services(app, settings)

    # ── Startup validation ────────────────────────────────────────────
    _validate_startup(settings, logger)

    # ── Blueprints ────────────────────────────────────────────────────
    from app.routes.health import health_bp
    from app.routes.chat import chat_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(chat_bp)

    logger.info(
        "app_started",
        env=settings.FLASK_ENV,
        model=settings.GEMINI_MODEL,
        log_level=settings.LOG_LEVEL,
    )

    return app


def _init_services(app: Flask, settings: Settings) -> None:
    """Create the Gemini relay and store it on `app.config["RELAY"]`."""
    from app.services.gemini_relay import GeminiRelay

    relay = GeminiRelay(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
        connect_timeout=settings.HTTP_CONNECT_TIMEOUT,
    )
    app.config["RELAY"] = relay


def _validate_startup(settings: Settings, logger) -> None:
    """Warn (without failing) when the app can't serve chat requests.

    A missing credential is fatal to each chat request, not to the process.
    """
    if not settings.has_credential:
        logger.warning(
            "credential_not_configured",
            hint="Set GEMINI_API_KEY in the environment or .env; /api/chat will fail until then.",
        )
