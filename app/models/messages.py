"""Conversation transcript entries and their JSON serialization."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, TypeAdapter, model_validator

Role = Literal["user", "ai"]


class ChatMessage(BaseModel):
    """One transcript entry. Immutable once created.

    Attributes:
        role: "user" for submitted input, "ai" for replies and error entries.
        text: Entry text, kept exactly as entered or received.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str

    @model_validator(mode="after")
    def _user_text_not_blank(self) -> "ChatMessage":
        if self.role == "user" and not self.text.strip():
            raise ValueError("user message text cannot be empty")
        return self


_history_adapter = TypeAdapter(list[ChatMessage])


def dump_history(messages) -> str:
    """Serialize a transcript to a JSON array string."""
    return _history_adapter.dump_json(list(messages)).decode("utf-8")


def load_history(raw: str | bytes) -> list[ChatMessage]:
    """Parse a JSON array produced by `dump_history`.

    Raises:
        pydantic.ValidationError: If the JSON is malformed or an entry is invalid.
    """
    return _history_adapter.validate_json(raw)
