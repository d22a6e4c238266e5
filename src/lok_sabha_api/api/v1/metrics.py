"""Dashboard metric endpoints.

Each endpoint maps its query string onto a ResultFilters value and returns
the metric engine's result unchanged.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.core.dependencies import get_async_session, required_year_filters, result_filters
from lok_sabha_api.schemas.metrics import (
    ContestMargin,
    GenderTrendPoint,
    KpiSummary,
    PartySeatShare,
    PartyVoteShare,
    StatePartyVoteShare,
    StateTurnout,
)
from lok_sabha_api.services import (
    gender_service,
    kpi_service,
    margin_service,
    seat_share_service,
    turnout_service,
    vote_share_service,
)
from lok_sabha_api.services.filters import ResultFilters

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/seat-share", response_model=list[PartySeatShare])
async def seat_share(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(required_year_filters)],
) -> list[PartySeatShare]:
    """Seats won per party, with winners grouped by district."""
    return await seat_share_service.get_seat_share(session, filters)


@metrics_router.get("/turnout", response_model=list[StateTurnout])
async def turnout(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(required_year_filters)],
) -> list[StateTurnout]:
    """Average turnout per state, highest first."""
    return await turnout_service.get_turnout_by_state(session, filters)


@metrics_router.get("/vote-share", response_model=list[PartyVoteShare | StatePartyVoteShare])
async def vote_share(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(required_year_filters)],
    aggregate: bool = Query(default=False, description="Party totals normalised to 100% instead of per-state rows"),
) -> list[PartyVoteShare] | list[StatePartyVoteShare]:
    """Vote share per party, aggregated or broken down by state."""
    return await vote_share_service.get_vote_share(session, filters, aggregate=aggregate)


@metrics_router.get("/gender-trend", response_model=list[GenderTrendPoint])
async def gender_trend(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
) -> list[GenderTrendPoint]:
    """Candidate counts per year and sex with per-year percentages."""
    return await gender_service.get_gender_trend(session, filters)


@metrics_router.get("/margins", response_model=list[ContestMargin])
async def margins(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
    limit: int = Query(default=10, ge=1, le=1000, description="Maximum contests"),
) -> list[ContestMargin]:
    """Winner/runner-up pairs ordered by margin percentage, closest first."""
    return await margin_service.get_margins(session, filters, limit=limit)


@metrics_router.get("/kpis", response_model=KpiSummary)
async def kpis(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(required_year_filters)],
) -> KpiSummary:
    """Headline numbers: seats, average turnout and share of women candidates."""
    return await kpi_service.get_kpis(session, filters)
