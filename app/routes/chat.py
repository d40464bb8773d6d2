"""Chat blueprint.

Routes:
    POST /api/chat → Relay one message to Gemini and return the reply
"""
from __future__ import annotations

import structlog
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from app.middleware.error_handlers import problem_response
from app.models.requests import ChatRequest
from app.models.responses import ChatResponse
from app.models.results import GatewayRequest, Success

logger = structlog.get_logger(__name__)

chat_bp = Blueprint("chat", __name__)


@chat_bp.route("/api/chat", methods=["POST"])
def chat():
    """Relay a chat message and return the generated reply.

    Request JSON:
        { "message": "Hello" }

    Response JSON (200):
        { "response": "Hi there!" }

    Failures are returned as problem JSON:
        { "type": "about:blank", "title": "...", "status": 502, "detail": "429: {...}" }
    """
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return problem_response("Request body must be a JSON object", 400)

    try:
        req = ChatRequest(**data)
    except ValidationError as e:
        errors = e.errors()
        message = errors[0].get("msg", "Validation error") if errors else "Invalid request"
        return problem_response(message, 400)

    relay = current_app.config["RELAY"]
    result = relay.relay(GatewayRequest(message=req.message))

    if isinstance(result, Success):
        return jsonify(ChatResponse(response=result.text).model_dump())

    logger.warning(
        "chat_failed",
        detail=result.detail,
        error_type=result.error_type,
        status_code=result.status_code,
    )
    return problem_response(result.detail, result.status_code)
