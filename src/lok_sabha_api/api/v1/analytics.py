"""Analytics endpoints: turnout leaders, seat swings, women candidates, close races and correlations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.core.config import Settings, get_settings
from lok_sabha_api.core.dependencies import get_async_session, required_year_filters, result_filters
from lok_sabha_api.schemas.metrics import (
    ContestMargin,
    EducationWinRate,
    PartySeatChange,
    PartyTypeVoteShare,
    StateCorrelation,
    StateTurnout,
    WomenCandidateShare,
)
from lok_sabha_api.services import (
    correlation_service,
    education_service,
    gender_service,
    margin_service,
    party_type_service,
    seat_change_service,
    turnout_service,
)
from lok_sabha_api.services.filters import ResultFilters

analytics_router = APIRouter(prefix="/analytics", tags=["analytics"])


@analytics_router.get("/highest-turnout", response_model=StateTurnout | None)
async def highest_turnout(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(required_year_filters)],
) -> StateTurnout | None:
    """The state with the highest average turnout, or null."""
    return await turnout_service.get_highest_turnout(session, filters)


@analytics_router.get("/seat-changes", response_model=list[PartySeatChange])
async def seat_changes(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    year1: int = Query(..., ge=1950, le=2100, description="Baseline year"),
    year2: int = Query(..., ge=1950, le=2100, description="Comparison year"),
) -> list[PartySeatChange]:
    """Seats per party in two years and the change between them."""
    return await seat_change_service.get_seat_changes(
        session, year1, year2, min_year_results=settings.valid_year_min_results
    )


@analytics_router.get("/women-candidates", response_model=list[WomenCandidateShare])
async def women_candidates(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
) -> list[WomenCandidateShare]:
    """Share of women among candidates per year and state."""
    return await gender_service.get_women_candidates(session, filters)


@analytics_router.get("/closest-contests", response_model=list[ContestMargin])
async def closest_contests(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(required_year_filters)],
) -> list[ContestMargin]:
    """The ten narrowest contests of a year."""
    return await margin_service.get_closest_contests(session, filters)


@analytics_router.get("/correlation", response_model=list[StateCorrelation])
async def correlation(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
) -> list[StateCorrelation]:
    """Per-state Pearson correlation between turnout and margin."""
    return await correlation_service.get_turnout_margin_correlation(session, filters)


@analytics_router.get("/national-vs-regional", response_model=list[PartyTypeVoteShare])
async def national_vs_regional(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
) -> list[PartyTypeVoteShare]:
    """Yearly vote share of national, regional and other parties."""
    return await party_type_service.get_national_vs_regional(session, filters)


@analytics_router.get("/education-correlation", response_model=list[EducationWinRate])
async def education_correlation(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
) -> list[EducationWinRate]:
    """Win rate per declared education level."""
    return await education_service.get_education_win_rates(session, filters)
