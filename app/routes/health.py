"""Health check endpoint.

Exposes GET /health. Gemini is not contacted; the check only reports
whether the relay has a usable credential.

Response format:
    {
        "status": "healthy" | "degraded",
        "version": "1.0.0",
        "model": "gemini-2.5-pro",
        "credential_configured": true | false
    }
"""
from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health", __name__)

APP_VERSION = "1.0.0"


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Application health check endpoint.

    Returns:
        200 if a credential is configured, 503 otherwise.
    """
    relay = current_app.config["RELAY"]
    configured = relay.has_credential

    response = {
        "status": "healthy" if configured else "degraded",
        "version": APP_VERSION,
        "model": relay.model,
        "credential_configured": configured,
    }
    return jsonify(response), 200 if configured else 503
