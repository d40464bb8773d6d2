"""Unit tests for the gateway HTTP client."""
import json

import httpx
import pytest

from app.client.gateway_client import GatewayClient
from app.models.results import Failure, GatewayRequest, Success
from app.utils.exceptions import ParseError, TransportError


def _client_with(handler):
    """GatewayClient whose requests go to `handler` instead of the network."""
    client = GatewayClient("http://gateway.test/")
    client._client.close()
    client._client = httpx.Client(base_url="http://gateway.test", transport=httpx.MockTransport(handler))
    return client


class TestRelay:

    def test_success(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"response": "Hi there!"})

        with _client_with(handler) as client:
            result = client.relay(GatewayRequest(message="Hello"))

        assert result == Success(text="Hi there!")
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/chat"
        assert json.loads(seen[0].content) == {"message": "Hello"}

    def test_problem_detail_used(self):
        def handler(request):
            return httpx.Response(
                502,
                json={"type": "about:blank", "title": "Bad Gateway", "status": 502, "detail": "429: quota"},
                headers={"Content-Type": "application/problem+json"},
            )

        with _client_with(handler) as client:
            result = client.relay(GatewayRequest(message="Hello"))

        assert result == Failure(detail="429: quota", status_code=502)

    @pytest.mark.parametrize("body", ["<html>oops</html>", "{}", "[]"])
    def test_error_without_detail(self, body):
        def handler(request):
            return httpx.Response(500, text=body)

        with _client_with(handler) as client:
            result = client.relay(GatewayRequest(message="Hello"))

        assert result == Failure(detail="Server error: 500", status_code=500)

    def test_unreachable_gateway_raises(self):
        def handler(request):
            raise httpx.ConnectError("All connection attempts failed")

        with _client_with(handler) as client:
            with pytest.raises(TransportError, match="All connection attempts failed"):
                client.relay(GatewayRequest(message="Hello"))

    def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out")

        with _client_with(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                client.relay(GatewayRequest(message="Hello"))

        assert exc_info.value.timed_out is True

    def test_success_without_response_field(self):
        def handler(request):
            return httpx.Response(200, json={"unexpected": True})

        with _client_with(handler) as client:
            with pytest.raises(ParseError):
                client.relay(GatewayRequest(message="Hello"))
