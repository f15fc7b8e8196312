"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Tests never use real API keys or a real database
    - Every test that asks for test_engine gets a fresh in-memory SQLite database

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency; Postgres-specific
      features are not exercised
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENHANCER_BACKEND", "local")
os.environ.setdefault("LOG_FORMAT", "text")

from careernotes.db.base import Base  # noqa: E402
import careernotes.models  # noqa: E402,F401


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
