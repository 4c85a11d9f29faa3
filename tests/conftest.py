"""Pytest configuration and fixtures.

Each test gets its own SQLite database file created from the ORM metadata.
"""

import os

# Must be set before app settings are first read
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services.measurement_store import MeasurementStore


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def store(session):
    return MeasurementStore(session)


@pytest_asyncio.fixture
async def client(session_maker):
    """HTTP client against the app, with get_db bound to the test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
