"""Terminal chat client for a running gateway.

Usage:
    chat-relay-client            # uses GATEWAY_URL from the environment / .env
    python -m app.client.terminal

Commands: /history (print transcript as JSON), /exit
"""
from __future__ import annotations

import sys

from app.client.conversation import ConversationController, ConversationState
from app.client.gateway_client import GatewayClient
from app.config import get_settings
from app.utils.logger import setup_logging


def _print_reply(state: ConversationState) -> None:
    if state.pending:
        print("  ...", flush=True)
        return
    if state.history and state.history[-1].role == "ai":
        print(f"\nAI: {state.history[-1].text}")


def main() -> None:
    settings = get_settings()
    setup_logging(log_level="WARNING", log_format="console", stream=sys.stderr)

    print("Chat relay client")
    print(f"gateway: {settings.GATEWAY_URL}")
    print("Commands: /history, /exit")
    print("-" * 50)

    with GatewayClient(settings.GATEWAY_URL, timeout=settings.HTTP_TIMEOUT + 30) as gateway:
        controller = ConversationController(gateway)
        last_len = 0

        def on_change(state: ConversationState) -> None:
            nonlocal last_len
            if len(state.history) != last_len or state.pending:
                last_len = len(state.history)
                _print_reply(state)

        controller.subscribe(on_change)

        while True:
            try:
                line = input("\nYou: ")
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return

            cmd = line.strip().lower()
            if cmd in {"/exit", "/quit"}:
                print("Bye!")
                return
            if cmd == "/history":
                print(controller.export_history())
                continue

            controller.submit(line)


if __name__ == "__main__":
    main()
