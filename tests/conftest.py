"""Shared test fixtures.

Provides:
- client_and_services: httpx AsyncClient over the API router backed by
  InMemoryEntityService doubles
- sqlite_session_factory: aiosqlite-backed session factory for service tests
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from src.elephant.core.database import Base
from src.elephant.deals.models import DealModel  # noqa: F401 -- register table
from src.elephant.deals.schemas import Deal
from src.elephant.passengers.models import PassengerModel  # noqa: F401 -- register table
from src.elephant.passengers.schemas import Passenger

from tests.doubles import InMemoryEntityService, make_api_app


@pytest_asyncio.fixture
async def client_and_services():
    """Test client with InMemoryEntityService doubles for both resources."""
    deals: InMemoryEntityService[Deal] = InMemoryEntityService()
    passengers: InMemoryEntityService[Passenger] = InMemoryEntityService()
    app = make_api_app(deals, passengers)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, deals, passengers


@pytest_asyncio.fixture
async def sqlite_session_factory(tmp_path):
    """Session factory over a fresh SQLite file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'elephant.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async def session_factory() -> AsyncGenerator[AsyncSession, None]:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    yield session_factory

    await engine.dispose()
