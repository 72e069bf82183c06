"""Fixtures for service, repository and route tests.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - app.state.payment_gateway is the in-memory FakePaymentGateway

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the conditional UPDATE and
      the UNIQUE index behave the same as on PostgreSQL
    - ASGITransport does not run the lifespan, so the fixture fills app.state itself
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
import app.models  # noqa: F401
from app.infrastructure.database import get_db
from app.infrastructure.fund_repository import SqlFundRepository
from app.infrastructure.request_repository import SqlDonationRequestRepository
from app.infrastructure.user_repository import SqlUserRepository
from app.main import app
from tests.services.fake_gateway import FakePaymentGateway


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def request_repo(test_db):
    return SqlDonationRequestRepository(test_db)


@pytest.fixture
def fund_repo(test_db):
    return SqlFundRepository(test_db)


@pytest.fixture
def user_repo(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def fake_gateway():
    return FakePaymentGateway()


@pytest.fixture
async def client(test_session_factory, fake_gateway):
    """FastAPI test client with DB dependency and payment gateway overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_gateway = getattr(app.state, "payment_gateway", None)
    app.state.payment_gateway = fake_gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.payment_gateway = original_gateway
