"""Relay request and tagged result types.

`relay()` returns exactly one of `Success` or `Failure`; callers branch
with `isinstance` and never need to catch exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class GatewayRequest:
    """A single chat message to relay upstream."""
    message: str


@dataclass(frozen=True)
class Success:
    """Upstream produced a reply (possibly the fallback text)."""
    text: str


@dataclass(frozen=True)
class Failure:
    """The request could not be relayed.

    Attributes:
        detail: Human-readable reason, including upstream detail verbatim.
        status_code: HTTP status the gateway answers with.
        error_type: Name of the error class that caused the failure.
    """
    detail: str
    status_code: int = 500
    error_type: str = ""


GatewayResult = Union[Success, Failure]


class Relay(Protocol):
    """Anything that turns a GatewayRequest into a GatewayResult."""

    def relay(self, request: GatewayRequest) -> GatewayResult:
        ...
