"""Conversation controller: transcript, in-flight flag, and error entries.

The controller is the only thing that mutates a conversation. A UI calls
`submit()` and renders `snapshot()`, or subscribes to be handed a new
snapshot after every change.

Submissions are serialized by the `pending` flag: while a relay call is
outstanding, further submits are ignored rather than queued. Every
outcome, including relay failures and transport errors, ends up as an
"ai" transcript entry, so `submit()` never raises.

Usage:
    controller = ConversationController(GatewayClient("http://127.0.0.1:5218"))
    controller.submit("Hello")
    for message in controller.history:
        print(message.role, message.text)
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable

import structlog

from app.models.messages import ChatMessage, dump_history, load_history
from app.models.results import Failure, GatewayRequest, Relay, Success

logger = structlog.get_logger(__name__)

ERROR_PREFIX = "Error: "
UNKNOWN_ERROR = "Something went wrong."


@dataclass(frozen=True)
class ConversationState:
    """Immutable view of a conversation at one point in time."""
    history: tuple[ChatMessage, ...] = ()
    pending: bool = False
    draft_input: str = ""


Listener = Callable[[ConversationState], None]


class ConversationController:
    """State machine for one conversation.

    Args:
        relay: Object with `relay(GatewayRequest) -> GatewayResult`, either
            a GatewayClient talking to the HTTP gateway or an in-process
            GeminiRelay.
    """

    def __init__(self, relay: Relay) -> None:
        self._relay = relay
        self._history: list[ChatMessage] = []
        self._pending = False
        self._draft = ""
        self._listeners: list[Listener] = []
        # Guards the pending check-and-set; never held across the relay call
        self._lock = threading.Lock()

    # ── Observable state ──────────────────────────────────────────────

    def snapshot(self) -> ConversationState:
        with self._lock:
            return self._snapshot_locked()

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        return self.snapshot().history

    @property
    def pending(self) -> bool:
        return self.snapshot().pending

    @property
    def draft_input(self) -> str:
        return self.snapshot().draft_input

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a new snapshot after each change.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ── Mutations ─────────────────────────────────────────────────────

    def set_draft(self, text: str) -> None:
        with self._lock:
            self._draft = text
        self._notify()

    def submit(self, raw_input: str | None = None) -> bool:
        """Send a message and append the reply (or error) to the transcript.

        Args:
            raw_input: Text to send. Defaults to the current draft.

        Returns:
            True if the submission was accepted, False if it was ignored
            because the input was blank or a request is already pending.
        """
        with self._lock:
            text = self._draft if raw_input is None else raw_input
            if not text.strip() or self._pending:
                logger.debug("submit_ignored", pending=self._pending, blank=not text.strip())
                return False
            self._history.append(ChatMessage(role="user", text=text))
            self._draft = ""
            self._pending = True
        self._notify()

        reply = ERROR_PREFIX + UNKNOWN_ERROR
        try:
            reply = self._call_relay(text)
        finally:
            with self._lock:
                self._history.append(ChatMessage(role="ai", text=reply))
                self._pending = False
            self._notify()
        return True

    def export_history(self) -> str:
        """Serialize the transcript to JSON."""
        return dump_history(self.history)

    def import_history(self, raw: str | bytes) -> None:
        """Replace the transcript with one produced by `export_history`.

        Raises:
            RuntimeError: If a request is in flight.
            pydantic.ValidationError: If `raw` is not a valid transcript.
        """
        messages = load_history(raw)
        with self._lock:
            if self._pending:
                raise RuntimeError("cannot import history while a request is pending")
            self._history = list(messages)
        self._notify()

    # ── Internals ─────────────────────────────────────────────────────

    def _call_relay(self, text: str) -> str:
        try:
            result = self._relay.relay(GatewayRequest(message=text))
            return _reply_text(result)
        except Exception as e:
            logger.error("relay_call_failed", error=str(e), error_type=type(e).__name__)
            return ERROR_PREFIX + (str(e) or UNKNOWN_ERROR)

    def _snapshot_locked(self) -> ConversationState:
        return ConversationState(
            history=tuple(self._history),
            pending=self._pending,
            draft_input=self._draft,
        )

    def _notify(self) -> None:
        with self._lock:
            state = self._snapshot_locked()
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(state)
            except Exception as e:
                logger.warning("listener_failed", error=str(e), exc_info=True)


def _reply_text(result) -> str:
    """Transcript text for a relay result; always a str."""
    if isinstance(result, Success) and result.text is not None:
        return str(result.text)
    if isinstance(result, Failure) and result.detail is not None:
        logger.info("relay_failure", detail=result.detail, error_type=result.error_type)
        return ERROR_PREFIX + str(result.detail)

    logger.error("relay_unexpected_result", result=repr(result))
    return ERROR_PREFIX + UNKNOWN_ERROR
