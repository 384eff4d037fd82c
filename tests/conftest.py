"""
Pytest configuration and shared fixtures for the contact relay tests.
"""

import os

# Set required environment variables BEFORE importing app modules
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("TO_EMAIL", "contact@mcbays.com")

from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from mcbays_contact.core.config import Settings


def make_settings(**overrides) -> Settings:
    """Build Settings without reading a local .env file."""
    values = {
        "TO_EMAIL": "contact@mcbays.com",
        "ALLOWED_ORIGIN": "https://www.mcbays.com",
        "FROM_EMAIL": None,
        "FROM_NAME": None,
        "MAILCHANNELS_API_KEY": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_request(method: str = "POST", headers: dict = None, body: bytes = b"") -> Request:
    """Build a bare starlette Request with a fixed body."""
    raw_headers = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "method": method,
        "path": "/",
        "query_string": b"",
        "headers": raw_headers,
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def mock_http_client(mock_client, status_code: int = 202, text: str = ""):
    """
    Wire a patched httpx.AsyncClient class so that ``post`` returns a
    response with the given status and body. Returns the ``post`` mock.
    """
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.is_success = 200 <= status_code < 300
    mock_response.text = text

    mock_post = AsyncMock(return_value=mock_response)
    mock_context = AsyncMock()
    mock_context.__aenter__.return_value.post = mock_post
    mock_client.return_value = mock_context
    return mock_post


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def sample_payload():
    return {
        "name": "Ann",
        "email": "ann@x.com",
        "company": "Acme",
        "message": "Hi there",
    }
