"""FastAPI dependency injection for database sessions and settings-derived filters."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.core.config import Settings, get_settings
from lok_sabha_api.core.database import get_session_factory
from lok_sabha_api.services.filters import Gender, ResultFilters


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle.

    Raises:
        StoreUnavailableError: If the engine has not been initialized.
    """
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def result_filters(
    settings: Annotated[Settings, Depends(get_settings)],
    year: int | None = Query(None, ge=1950, le=2100, description="Election year"),
    state: int | None = Query(None, description="State id"),
    party: int | None = Query(None, description="Party id"),
    gender: Gender | None = Query(None, description="Candidate sex (M or F)"),
    district: int | None = Query(None, description="Constituency id standing for its whole name group"),
    constituency: int | None = Query(None, description="Single constituency id"),
) -> ResultFilters:
    """Collect the canonical filter query parameters into a ResultFilters value."""
    return ResultFilters(
        year=year,
        state=state,
        party=party,
        gender=gender,
        district=district,
        constituency=constituency,
        min_year_results=settings.valid_year_min_results,
    )


async def required_year_filters(
    settings: Annotated[Settings, Depends(get_settings)],
    year: int = Query(..., ge=1950, le=2100, description="Election year"),
    state: int | None = Query(None, description="State id"),
    party: int | None = Query(None, description="Party id"),
    gender: Gender | None = Query(None, description="Candidate sex (M or F)"),
    district: int | None = Query(None, description="Constituency id standing for its whole name group"),
    constituency: int | None = Query(None, description="Single constituency id"),
) -> ResultFilters:
    """Same as result_filters but ``year`` is mandatory."""
    return ResultFilters(
        year=year,
        state=state,
        party=party,
        gender=gender,
        district=district,
        constituency=constituency,
        min_year_results=settings.valid_year_min_results,
    )
