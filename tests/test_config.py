"""Tests for settings loading and validation."""
import pytest
from pydantic import ValidationError

from app.config import PLACEHOLDER_API_KEY, Settings, is_credential_configured
from helpers import make_settings


class TestCredential:

    def test_default_is_placeholder(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        settings = Settings(_env_file=None)

        assert settings.GEMINI_API_KEY == PLACEHOLDER_API_KEY
        assert settings.has_credential is False

    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "  env-key  ")
        settings = Settings(_env_file=None)

        assert settings.GEMINI_API_KEY == "env-key"
        assert settings.has_credential is True

    @pytest.mark.parametrize("value, expected", [
        (None, False),
        ("", False),
        ("  ", False),
        (PLACEHOLDER_API_KEY, False),
        ("real-key", True),
    ])
    def test_is_credential_configured(self, value, expected):
        assert is_credential_configured(value) is expected


class TestValidation:

    def test_urls_trailing_slash_stripped(self):
        settings = make_settings(GEMINI_BASE_URL="https://example.test/v1beta/", GATEWAY_URL="http://gw:1/")

        assert settings.GEMINI_BASE_URL == "https://example.test/v1beta"
        assert settings.GATEWAY_URL == "http://gw:1"

    def test_log_level_normalized(self):
        assert make_settings(LOG_LEVEL=" debug ").LOG_LEVEL == "DEBUG"

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            make_settings(LOG_LEVEL="LOUD")

    def test_timeout_bounded(self):
        with pytest.raises(ValidationError):
            make_settings(HTTP_TIMEOUT=0)

    def test_production_requires_secret(self):
        with pytest.raises(ValidationError):
            make_settings(FLASK_ENV="production")

    @pytest.mark.parametrize("raw, expected", [
        ("*", "*"),
        ("", "*"),
        ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
    ])
    def test_cors_origins(self, raw, expected):
        assert make_settings(CORS_ORIGINS=raw).cors_origins == expected
