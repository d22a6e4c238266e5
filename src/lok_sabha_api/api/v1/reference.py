"""Reference data endpoints: years, states, parties, constituencies, result rows and search."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.core.config import Settings, get_settings
from lok_sabha_api.core.dependencies import get_async_session, result_filters
from lok_sabha_api.schemas.reference import (
    ConstituencyResponse,
    DistrictResponse,
    ElectionResultRow,
    PartyResponse,
    SearchResponse,
    StateResponse,
)
from lok_sabha_api.services import reference_service
from lok_sabha_api.services.filters import ResultFilters
from lok_sabha_api.services.reference_service import SearchType

reference_router = APIRouter(tags=["reference"])


@reference_router.get("/years", response_model=list[int])
async def list_years(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[int]:
    """Election years with complete data, most recent first."""
    return await reference_service.list_years(session, settings.valid_year_min_results)


@reference_router.get("/states", response_model=list[StateResponse])
async def list_states(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> list[StateResponse]:
    """All states and union territories."""
    return await reference_service.list_states(session)


@reference_router.get("/parties", response_model=list[PartyResponse])
async def list_parties(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> list[PartyResponse]:
    """All parties with their TCPD classification."""
    return await reference_service.list_parties(session)


@reference_router.get("/constituencies", response_model=list[DistrictResponse])
async def list_districts(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    state: int | None = Query(default=None, description="State id"),
) -> list[DistrictResponse]:
    """Districts: one entry per constituency name, keyed by its lowest row id.

    The returned ``id`` is what the ``district`` filter of the metric
    endpoints accepts.
    """
    return await reference_service.list_districts(session, state=state)


@reference_router.get("/constituencies-list", response_model=list[ConstituencyResponse])
async def list_constituencies(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    state: int | None = Query(default=None, description="State id"),
    district: int | None = Query(default=None, description="District id (constituency name group)"),
) -> list[ConstituencyResponse]:
    """Individual constituency rows."""
    return await reference_service.list_constituencies(session, state=state, district=district)


@reference_router.get("/elections", response_model=list[ElectionResultRow])
async def list_results(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    filters: Annotated[ResultFilters, Depends(result_filters)],
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum rows"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
) -> list[ElectionResultRow]:
    """Row-level results, newest year first then by votes."""
    return await reference_service.list_results(session, filters, limit=limit, offset=offset)


@reference_router.get("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    q: str = Query(..., min_length=1, max_length=100, description="Case-insensitive substring"),
    search_type: SearchType = Query(default=SearchType.ALL, alias="type", description="Section to search"),
) -> SearchResponse:
    """Search candidates, constituencies and parties by name."""
    return await reference_service.search(session, q, search_type)
