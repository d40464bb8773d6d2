"""Exception hierarchy for the chat relay.

Every failure the relay can hit inherits from RelayError, so the relay
boundary can turn any of them into a `Failure` result with one handler.

Hierarchy:
    RelayError (base)
    ├── ConfigurationError     API key missing or still the placeholder
    ├── InputValidationError   Empty message
    ├── UpstreamError          Gemini answered with a non-success status
    ├── ParseError             Gemini body is not the expected JSON shape
    └── TransportError         Timeout or connection failure
"""
from __future__ import annotations


class RelayError(Exception):
    """Base exception for the chat relay."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(RelayError):
    """Raised when no usable credential is configured."""

    def __init__(self, message: str = "credential missing") -> None:
        super().__init__(message, status_code=500)


class InputValidationError(RelayError):
    """Raised when the chat message fails validation."""

    def __init__(self, message: str = "empty message") -> None:
        super().__init__(message, status_code=422)


class UpstreamError(RelayError):
    """Raised when the upstream API returns a non-success status.

    The upstream body is kept verbatim so quota, auth, and request
    format errors can be diagnosed from the message alone.
    """

    def __init__(self, upstream_status: int, upstream_body: str) -> None:
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        super().__init__(f"{upstream_status}: {upstream_body}", status_code=502)


class ParseError(RelayError):
    """Raised when a success response cannot be parsed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to parse response: {reason}", status_code=502)


class TransportError(RelayError):
    """Raised when a request cannot be completed at the network layer."""

    def __init__(self, message: str, timed_out: bool = False) -> None:
        self.timed_out = timed_out
        super().__init__(message, status_code=504 if timed_out else 502)
