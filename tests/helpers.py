"""Builders for upstream responses used across the test suite."""
import json

import httpx

from app.config import Settings


def make_settings(**overrides) -> Settings:
    """Build Settings without touching the process environment or .env."""
    values = {"GEMINI_API_KEY": "test-key", "LOG_FORMAT": "console", "LOG_LEVEL": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def gemini_response(data=None, status_code=200, text=None) -> httpx.Response:
    """Build an upstream httpx.Response from JSON data or raw text."""
    if text is None:
        text = json.dumps(data)
    return httpx.Response(status_code, text=text)


def gemini_reply(text: str) -> dict:
    """Well-formed generateContent body with one candidate and one part."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
