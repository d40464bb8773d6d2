"""Centralized application configuration using Pydantic Settings.

Loads configuration from environment variables and `.env` file with
full validation, type coercion, and sensible defaults.

Usage:
    from app.config import get_settings

    settings = get_settings()  # cached singleton
    print(settings.GEMINI_MODEL)
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Documented "not configured" value shipped in .env templates
PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file.

    GEMINI_API_KEY is deliberately optional: a missing or placeholder key
    does not stop the process, every chat request fails fast instead.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # silently ignore unknown env vars
    )

    # ── Flask ──────────────────────────────────────────────────────────
    FLASK_ENV: str = Field(default="development", description="Flask environment (development/production)")
    FLASK_DEBUG: bool = Field(default=False, description="Enable Flask debug mode")
    SECRET_KEY: str = Field(default="change-me-in-production", description="Flask secret key")
    PORT: int = Field(default=5218, ge=1, le=65535, description="Port for the development server")

    # ── Gemini upstream ───────────────────────────────────────────────
    GEMINI_API_KEY: str = Field(default=PLACEHOLDER_API_KEY, description="Gemini API key")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Generative Language API base URL",
    )
    GEMINI_MODEL: str = Field(default="gemini-2.5-pro", description="Gemini model identifier")

    # ── HTTP Client ───────────────────────────────────────────────────
    HTTP_TIMEOUT: float = Field(default=60.0, ge=1, le=300, description="Upstream request timeout (seconds)")
    HTTP_CONNECT_TIMEOUT: float = Field(default=10.0, ge=1, le=60, description="Upstream connect timeout (seconds)")

    # ── CORS ──────────────────────────────────────────────────────────
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated allowed origins, or '*'")

    # ── Client ────────────────────────────────────────────────────────
    GATEWAY_URL: str = Field(default="http://127.0.0.1:5218", description="Gateway base URL used by the chat client")

    # ── Logging ───────────────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    LOG_FORMAT: str = Field(default="json", description="Log output format ('json' for prod, 'console' for dev)")

    # ── Derived ───────────────────────────────────────────────────────

    @property
    def has_credential(self) -> bool:
        """Whether a usable Gemini API key is configured."""
        return is_credential_configured(self.GEMINI_API_KEY)

    @property
    def cors_origins(self) -> str | list[str]:
        """CORS origins in the shape flask-cors expects."""
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if not origins or "*" in origins:
            return "*"
        return origins

    # ── Validators ────────────────────────────────────────────────────

    @field_validator("GEMINI_API_KEY")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Refuse the default secret key in production."""
        env = info.data.get("FLASK_ENV", "development")
        if env == "production" and v == "change-me-in-production":
            raise ValueError(
                "SECRET_KEY must be changed from the default in production. "
                "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        v = v.upper().strip()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @field_validator("GEMINI_BASE_URL", "GATEWAY_URL")
    @classmethod
    def validate_urls(cls, v: str) -> str:
        """Ensure base URLs don't have trailing slashes."""
        return v.rstrip("/")


def is_credential_configured(api_key: str | None) -> bool:
    """Return False for an absent, blank, or placeholder API key."""
    if api_key is None:
        return False
    api_key = api_key.strip()
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Uses `lru_cache` so the `.env` file is only read once.
    Call this everywhere instead of instantiating Settings directly.
    """
    return Settings()
