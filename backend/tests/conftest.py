"""Shared fixtures: a file-backed SQLite store per test and an ASGI client."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import models  # noqa: F401  registers tables on Base.metadata
from core.database import Base, build_engine, get_db
from main import app
from services.coingecko.client import CoinGeckoService, get_coingecko_service


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """Each test gets its own database file so concurrent sessions share state."""
    db_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'favorites.db'}")
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()


@pytest.fixture
def upstream_handler() -> dict[str, Callable[[httpx.Request], httpx.Response]]:
    """Mutable slot holding the fake CoinGecko handler for the current test."""
    return {
        "handler": lambda request: httpx.Response(200, json={}),
    }


@pytest_asyncio.fixture
async def client(session_factory, upstream_handler) -> AsyncIterator[httpx.AsyncClient]:
    """ASGI client with the DB session and CoinGecko service swapped for test doubles."""

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as db_session:
            yield db_session

    coingecko = CoinGeckoService(
        base_url="https://coingecko.test/api/v3",
        transport=httpx.MockTransport(lambda request: upstream_handler["handler"](request)),
    )

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_coingecko_service] = lambda: coingecko
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()
        await coingecko.aclose()
