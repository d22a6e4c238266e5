"""Shared test fixtures: settings, an on-disk async SQLite store, sessions and a data seeder."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lok_sabha_api.core.config import Settings
from lok_sabha_api.models import Base
from tests.seeding import ResultSeeder


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'results.db'}",
        valid_year_min_results=1,
        rate_limit_per_minute=10_000,
    )


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an on-disk async SQLite engine.

    On-disk so that sibling sessions opened for concurrent queries share the data.
    """
    engine = create_async_engine(settings.database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def seeder(async_session: AsyncSession) -> ResultSeeder:
    """Seeder writing through the test session."""
    return ResultSeeder(async_session)
