"""Pydantic models for API response serialization."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Outgoing chat response.

    Attributes:
        response: The generated reply text.
    """
    response: str = Field(..., description="Generated reply text")


class ProblemDetail(BaseModel):
    """Problem-style error body (RFC 9457 field names)."""
    type: str = Field(default="about:blank")
    title: str = Field(..., description="Short summary of the problem class")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
