"""Shared pytest fixtures for the relay test suite.

Provides reusable fixtures for:
- Test settings (never read from the real environment / .env)
- Flask app and test client
- A GeminiRelay with a test key
"""
import pytest

from app import create_app
from app.services.gemini_relay import GeminiRelay
from helpers import make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    """Create a Flask application instance for testing."""
    app = create_app(settings)
    app.config["TESTING"] = True
    yield app
    app.config["RELAY"].close()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def relay():
    """GeminiRelay with a usable test key."""
    service = GeminiRelay(api_key="test-key", model="test-model", timeout=5)
    yield service
    service.close()
