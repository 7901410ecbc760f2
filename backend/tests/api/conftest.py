"""API test fixtures — FastAPI app over an in-memory SQLite store.

Invariants:
    - Each test builds its own app via create_app()
    - The store handle is installed on app.state exactly as the lifespan does,
      so routes run the real get_db dependency
"""

import pytest
from httpx import ASGITransport, AsyncClient

from sensorhub.infrastructure.database import DatabaseSessionManager
from sensorhub.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
async def client(app, test_engine):
    app.state.db_manager = DatabaseSessionManager.from_engine(test_engine)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def bare_client(app):
    """Client for an app whose lifespan never ran (no store handle)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
