"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from hooklog.config import Settings

WEBHOOK_SECRET = "test-webhook-secret"


@pytest.fixture
def settings():
    """Settings with signatures enforced and no read token."""
    return Settings(webhook_secret=WEBHOOK_SECRET, events_token="", _env_file=None)


@pytest.fixture
def app(settings):
    """Create a test application instance with its own event store."""
    from hooklog.main import create_app

    return create_app(settings)


@pytest.fixture
def store(app):
    """The event store owned by the test app."""
    return app.state.event_store


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
