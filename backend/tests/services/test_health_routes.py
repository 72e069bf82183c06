"""Health checks — liveness always up, readiness follows the database."""

import pytest

from app.infrastructure.database import DatabaseSessionManager
from app.main import app


async def test_liveness(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    original = getattr(app.state, "db_manager", None)
    app.state.db_manager = manager
    yield manager
    app.state.db_manager = original
    await manager.close()


async def test_readiness_with_database(client, db_manager):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client):
    original = getattr(app.state, "db_manager", None)
    app.state.db_manager = None
    try:
        response = await client.get("/api/v1/health/ready")
    finally:
        app.state.db_manager = original
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "unavailable"
