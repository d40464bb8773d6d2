"""Tests for transcript entries and their serialization."""
import json

import pytest
from pydantic import ValidationError

from app.models.messages import ChatMessage, dump_history, load_history


class TestChatMessage:

    def test_roles(self):
        assert ChatMessage(role="user", text="hi").role == "user"
        assert ChatMessage(role="ai", text="Error: boom").role == "ai"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ChatMessage(role="assistant", text="hi")

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_user_text_rejected(self, text):
        with pytest.raises(ValidationError):
            ChatMessage(role="user", text=text)

    def test_blank_ai_text_allowed(self):
        assert ChatMessage(role="ai", text="").text == ""

    def test_frozen(self):
        message = ChatMessage(role="user", text="hi")
        with pytest.raises(ValidationError):
            message.text = "changed"


class TestHistorySerialization:

    def test_round_trip_preserves_whitespace(self):
        history = [
            ChatMessage(role="user", text="  leading and trailing  "),
            ChatMessage(role="ai", text="multi\nline\r\n\ttabbed\n\n"),
            ChatMessage(role="user", text="unicode ✨ café"),
            ChatMessage(role="ai", text="Error: 429: {\"error\": \"quota\"}"),
        ]

        assert load_history(dump_history(history)) == history

    def test_dump_shape(self):
        raw = dump_history([ChatMessage(role="user", text="Hello"), ChatMessage(role="ai", text="Hi there!")])

        assert json.loads(raw) == [
            {"role": "user", "text": "Hello"},
            {"role": "ai", "text": "Hi there!"},
        ]

    def test_empty(self):
        assert load_history(dump_history([])) == []

    @pytest.mark.parametrize("raw", ["not json", "{}", '[{"role": "user"}]', '[{"role": "user", "text": " "}]'])
    def test_load_rejects_invalid(self, raw):
        with pytest.raises(ValidationError):
            load_history(raw)
