"""
Shared fixtures for integration tests.

Requests go through the full ASGI app (middleware, routing, dependencies).
The settings dependency is overridden so tests control CORS origin and
recipient without touching the environment.

Example:
    @pytest.mark.asyncio
    async def test_something(client):
        response = await client.post("/", json={...})
        assert response.status_code == 200
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mcbays_contact.core.config import get_settings
from mcbays_contact.main import app
from tests.conftest import make_settings


ALLOWED_ORIGIN = "https://www.mcbays.com"
TO_EMAIL = "contact@mcbays.com"


@pytest_asyncio.fixture
async def client():
    """
    Async test client with the settings dependency overridden.

    IMPORTANT: Always use `await` with client methods.
    """
    app.dependency_overrides[get_settings] = lambda: make_settings(
        ALLOWED_ORIGIN=ALLOWED_ORIGIN, TO_EMAIL=TO_EMAIL
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
