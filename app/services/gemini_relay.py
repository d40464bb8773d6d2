"""Gemini relay: one chat message in, one normalized result out.

Sends the message to the Generative Language API `generateContent`
endpoint as a single prompt turn (no history), then maps the reply:
- success status  → first candidate / first part / text, or the fallback text
- other statuses  → Failure carrying "<status>: <upstream body>"
- bad body        → Failure "Failed to parse response: ..."
- timeout / I/O   → Failure with the transport error

`relay()` never raises. The instance is stateless apart from the
read-only credential and the pooled httpx.Client, so one relay can serve
many conversations concurrently.

Usage:
    from app.services.gemini_relay import GeminiRelay

    with GeminiRelay(api_key="...", model="gemini-2.5-pro") as relay:
        result = relay.relay(GatewayRequest(message="Hello"))
"""
from __future__ import annotations

import json
import time
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from app.config import is_credential_configured
from app.models.gemini import GeminiResponse
from app.models.results import Failure, GatewayRequest, GatewayResult, Success
from app.utils.exceptions import (
    ConfigurationError,
    InputValidationError,
    ParseError,
    RelayError,
    TransportError,
    UpstreamError,
)

logger = structlog.get_logger(__name__)

FALLBACK_TEXT = "No response from AI."


class GeminiRelay:
    """Relays single chat messages to Gemini.

    Args:
        api_key: Gemini API key, resolved once at startup. A blank key or
            the placeholder makes every call fail fast.
        model: Gemini model identifier (e.g., "gemini-2.5-pro").
        base_url: Generative Language API base URL.
        timeout: Upstream request timeout in seconds.
        connect_timeout: Connect timeout in seconds.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60,
        connect_timeout: float = 10,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            headers={"Content-Type": "application/json"},
        )

    @property
    def model(self) -> str:
        return self._model

    @property
    def has_credential(self) -> bool:
        return is_credential_configured(self._api_key)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # ── Public API ────────────────────────────────────────────────────

    def relay(self, request: GatewayRequest) -> GatewayResult:
        """Relay one message upstream and normalize the outcome.

        Args:
            request: The message to send. Must be non-blank.

        Returns:
            Success with the reply text, or Failure with a detail string.
        """
        try:
            return Success(text=self._generate(request.message))
        except RelayError as e:
            return Failure(detail=e.message, status_code=e.status_code, error_type=type(e).__name__)
        except Exception as e:
            logger.error("relay_unexpected_error", error=str(e), exc_info=True)
            return Failure(detail=f"Unexpected relay error: {e}", status_code=500, error_type=type(e).__name__)

    # ── Request Handling ──────────────────────────────────────────────

    def _generate(self, message: str) -> str:
        if not message or not message.strip():
            raise InputValidationError()
        if not self.has_credential:
            logger.warning("gemini_credential_missing", model=self._model)
            raise ConfigurationError()

        payload = {"contents": [{"parts": [{"text": message}]}]}

        logger.info("gemini_request", model=self._model, message_chars=len(message))
        start = time.monotonic()
        try:
            response = self._client.post(
                f"/models/{self._model}:generateContent",
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.TimeoutException as e:
            logger.warning("gemini_timeout", timeout=self._timeout, error=str(e))
            raise TransportError(
                f"Gemini request timed out after {self._timeout}s", timed_out=True
            ) from e
        except httpx.HTTPError as e:
            # str(e) of a RequestError can include the URL, which carries the key
            reason = f"{type(e).__name__}: {e}".replace(self._api_key, "***")
            logger.error("gemini_transport_error", error=reason)
            raise TransportError(f"Could not reach Gemini API ({reason})") from e
        duration_ms = round((time.monotonic() - start) * 1000)

        if not response.is_success:
            body = response.text
            logger.error(
                "gemini_error",
                status=response.status_code,
                body=body,
                duration_ms=duration_ms,
            )
            raise UpstreamError(response.status_code, body)

        text = self._extract_text(response.text)
        logger.info(
            "gemini_response",
            status=response.status_code,
            has_text=text is not None,
            duration_ms=duration_ms,
        )
        return FALLBACK_TEXT if text is None else text

    # ── Response Parsing ──────────────────────────────────────────────

    def _extract_text(self, body: str) -> str | None:
        """Parse a success body and pull out the first text fragment.

        Raises:
            ParseError: If the body is not JSON or doesn't fit the response shape.
        """
        try:
            data: Any = json.loads(body)
            if data is None:
                return None
            return GeminiResponse.model_validate(data).first_text()
        except ValidationError as e:
            logger.warning("gemini_parse_error", error=str(e), body=body[:500])
            raise ParseError(_summarize_validation_error(e)) from e
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            logger.warning("gemini_parse_error", error=str(e), body=body[:500])
            raise ParseError(str(e)) from e


def _summarize_validation_error(error: ValidationError) -> str:
    """One-line description of the first validation problem."""
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"{location}: {first.get('msg', 'invalid value')}"
