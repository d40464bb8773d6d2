"""HTTP client for the gateway's POST /api/chat endpoint.

Implements the same `relay()` contract as GeminiRelay, so a
ConversationController can run against a remote gateway unchanged.
Gateway-reported failures come back as `Failure`; if the gateway can't be
reached at all, `TransportError` is raised for the controller to record.
"""
from __future__ import annotations

from typing import Any

import httpx
import structlog

from app.models.results import Failure, GatewayRequest, GatewayResult, Success
from app.utils.exceptions import ParseError, TransportError

logger = structlog.get_logger(__name__)


class GatewayClient:
    """Talks to a running chat relay gateway.

    Args:
        base_url: Gateway base URL (e.g., "http://127.0.0.1:5218").
        timeout: Request timeout in seconds; should exceed the gateway's
            own upstream timeout.
    """

    def __init__(self, base_url: str, timeout: float = 90) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def relay(self, request: GatewayRequest) -> GatewayResult:
        """POST the message to the gateway.

        Raises:
            TransportError: If the gateway is unreachable or times out.
            ParseError: If a success response has no "response" field.
        """
        try:
            response = self._client.post("/api/chat", json={"message": request.message})
        except httpx.TimeoutException as e:
            raise TransportError(f"Gateway request timed out: {e}", timed_out=True) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or f"Could not reach gateway at {self._base_url}") from e

        body = _json_or_empty(response)

        if not response.is_success:
            detail = body.get("detail") or f"Server error: {response.status_code}"
            logger.info("gateway_failure", status=response.status_code, detail=detail)
            return Failure(detail=str(detail), status_code=response.status_code)

        text = body.get("response")
        if not isinstance(text, str):
            raise ParseError("gateway reply has no 'response' text")
        return Success(text=text)


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
