"""
Shared fixtures.

Every async test gets a fresh in-memory SQLite database with the current
schema.
"""

import os

# Cheap password hashing for tests; must be set before settings are imported
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from stridelog.db.migrations import ensure_schema
from stridelog.features.activities import ActivityRecord
from stridelog.shared.geo import GeoPoint


@pytest_asyncio.fixture
async def engine():
    """In-memory database shared by all sessions of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(ensure_schema)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


def make_record(
    segments: list[list[tuple[float, float]]],
    activity_type: str = "running",
    distance_km: float = 1.5,
    duration: str = "00:10:00",
    created_at: datetime | None = None,
) -> ActivityRecord:
    """Build an ActivityRecord from (lat, lon) tuples."""
    return ActivityRecord(
        type=activity_type,
        distance_km=distance_km,
        duration=duration,
        created_at=created_at or datetime(2026, 5, 4, 7, 30),
        segments=[[GeoPoint(lat, lon) for lat, lon in segment] for segment in segments],
    )


@pytest.fixture
def record_factory():
    return make_record
