"""Pydantic models for API request validation."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Incoming chat message request.

    Blank messages are accepted here and rejected by the relay, so the
    caller gets the relay's "empty message" failure rather than a schema
    error.

    Attributes:
        message: The user's message text, forwarded verbatim.
    """
    message: str = Field(..., description="User message")
