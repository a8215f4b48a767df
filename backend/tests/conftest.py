"""Pytest configuration and fixtures for presale backend tests"""
import asyncio
import os

# Must be set before presale.config is first imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from presale.main import app
from presale.api.deps import get_clock, get_rate_oracle
from presale.models import Base, get_db
from presale.services.context import PresaleContext
from presale.services.oracle import StaticRateOracle
from presale.services.presale import PresaleService

from helpers import OWNER, GENESIS, UPDATED_PRICE, MutableClock, round_params, settings


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh in-memory database for each test.

    StaticPool keeps the single SQLite connection alive for the test's lifetime.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(GENESIS)


@pytest.fixture
def oracle() -> StaticRateOracle:
    """ETH at 1880 USD, 8 decimals like a Chainlink aggregator"""
    return StaticRateOracle(188000000000, 8)


@pytest.fixture
def service(db_session: AsyncSession, clock: MutableClock, oracle: StaticRateOracle) -> PresaleService:
    ctx = PresaleContext(
        db=db_session,
        oracle=oracle,
        clock=clock,
        settings=settings,
        lock=asyncio.Lock(),
    )
    return PresaleService(ctx)


@pytest_asyncio.fixture
async def presale_round(service: PresaleService, clock: MutableClock):
    """A configured round that has not started yet"""
    return await service.registry.create_round(OWNER, **round_params(clock.now()))


@pytest_asyncio.fixture
async def open_round(service: PresaleService, clock: MutableClock, presale_round):
    """Round with the price lowered to 0.05 USD and the clock at its start"""
    await service.registry.change_price(OWNER, presale_round.id, UPDATED_PRICE)
    clock.set(presale_round.start_time)
    return presale_round


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession, clock: MutableClock, oracle: StaticRateOracle) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_rate_oracle] = lambda: oracle

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
