"""Pydantic models for the Gemini `generateContent` response.

Only the path to the first text fragment is modelled:

    {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}

Every level is optional and field names are matched case-insensitively,
so `{"Candidates": [...]}` parses the same as `{"candidates": [...]}`.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class _CaseInsensitiveModel(BaseModel):
    """Base model that lower-cases incoming keys before validation."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _lower_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
        return data


class GeminiPart(_CaseInsensitiveModel):
    text: str | None = None


class GeminiContent(_CaseInsensitiveModel):
    parts: list[GeminiPart] | None = None


class GeminiCandidate(_CaseInsensitiveModel):
    content: GeminiContent | None = None


class GeminiResponse(_CaseInsensitiveModel):
    candidates: list[GeminiCandidate] | None = None

    def first_text(self) -> str | None:
        """Return the first candidate's first part text, or None if any link is missing."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text
