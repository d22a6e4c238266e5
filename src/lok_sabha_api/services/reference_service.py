"""Reference service: years, states, parties, constituencies, row listing and search."""

from enum import StrEnum

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State
from lok_sabha_api.schemas.reference import (
    CandidateMatch,
    ConstituencyMatch,
    ConstituencyResponse,
    DistrictResponse,
    ElectionResultRow,
    PartyMatch,
    PartyResponse,
    SearchResponse,
    StateResponse,
)
from lok_sabha_api.services.filters import (
    VALID_YEAR_MIN_RESULTS,
    ResultFilters,
    build_predicates,
    joined_results,
    resolve_district,
    valid_years_subquery,
)

SEARCH_RESULT_LIMIT = 20


class SearchType(StrEnum):
    """What a search query should look through."""

    CANDIDATE = "candidate"
    CONSTITUENCY = "constituency"
    PARTY = "party"
    ALL = "all"


async def list_years(session: AsyncSession, min_results: int = VALID_YEAR_MIN_RESULTS) -> list[int]:
    """Return the valid election years, most recent first."""
    query = valid_years_subquery(min_results).subquery()
    result = await session.execute(select(query.c.year).order_by(query.c.year.desc()))
    return [year for (year,) in result.all()]


async def list_states(session: AsyncSession) -> list[StateResponse]:
    """Return all states ordered by name."""
    result = await session.execute(select(State).order_by(State.name))
    return [StateResponse.model_validate(state) for state in result.scalars().all()]


async def list_parties(session: AsyncSession) -> list[PartyResponse]:
    """Return all parties ordered by name."""
    result = await session.execute(select(Party).order_by(Party.name))
    return [PartyResponse.model_validate(party) for party in result.scalars().all()]


async def list_districts(session: AsyncSession, *, state: int | None = None) -> list[DistrictResponse]:
    """Return one entry per constituency name, keyed by its lowest row id.

    Args:
        session: Database session.
        state: Optional state id filter.

    Returns:
        Districts ordered by name.
    """
    query = (
        select(func.min(Constituency.id), Constituency.name, func.min(State.name))
        .join(State, Constituency.state_id == State.id)
        .group_by(Constituency.name)
        .order_by(Constituency.name)
    )
    if state is not None:
        query = query.where(Constituency.state_id == state)
    result = await session.execute(query)
    return [
        DistrictResponse(id=district_id, name=name, state_name=state_name)
        for district_id, name, state_name in result.all()
    ]


async def list_constituencies(
    session: AsyncSession,
    *,
    state: int | None = None,
    district: int | None = None,
) -> list[ConstituencyResponse]:
    """Return individual constituency rows, optionally within a state or district.

    Args:
        session: Database session.
        state: Optional state id filter.
        district: Optional district id; expands to every row sharing its name.

    Returns:
        Constituencies ordered by name, then number.
    """
    query = (
        select(
            Constituency.id,
            Constituency.name,
            Constituency.constituency_no,
            Constituency.constituency_type,
            Constituency.state_id,
            State.name,
        )
        .join(State, Constituency.state_id == State.id)
        .order_by(Constituency.name, Constituency.constituency_no, Constituency.id)
    )
    if state is not None:
        query = query.where(Constituency.state_id == state)
    if district is not None:
        district_name = await resolve_district(session, district)
        if district_name is not None:
            query = query.where(Constituency.name == district_name)
    result = await session.execute(query)
    return [
        ConstituencyResponse(
            id=row_id,
            name=name,
            constituency_no=number,
            constituency_type=kind,
            state_id=state_id,
            state_name=state_name,
        )
        for row_id, name, number, kind, state_id, state_name in result.all()
    ]


async def list_results(
    session: AsyncSession,
    filters: ResultFilters,
    *,
    limit: int = 100,
    offset: int = 0,
) -> list[ElectionResultRow]:
    """List row-level results with their dimension labels.

    Args:
        session: Database session.
        filters: Filter set; every dimension is optional.
        limit: Page size.
        offset: Rows to skip.

    Returns:
        Rows ordered by year descending, then votes descending.
    """
    predicates = await build_predicates(session, filters)
    query = (
        joined_results(
            Election.year,
            State.name,
            Constituency.name,
            Party.name,
            Candidate.name,
            Candidate.sex,
            Result.votes,
            Result.vote_share_percentage,
            Result.turnout_percentage,
            Result.margin_percentage,
            Result.position,
        )
        .where(*predicates)
        .order_by(Election.year.desc(), Result.votes.desc(), Result.id)
        .limit(limit)
        .offset(offset)
    )
    result = await session.execute(query)
    return [
        ElectionResultRow(
            year=year,
            state_name=state_name,
            constituency_name=constituency_name,
            party_name=party_name,
            candidate_name=candidate_name,
            gender=sex,
            votes=votes,
            vote_share_percentage=vote_share,
            turnout_percentage=turnout,
            margin_percentage=margin,
            position=position,
        )
        for (
            year,
            state_name,
            constituency_name,
            party_name,
            candidate_name,
            sex,
            votes,
            vote_share,
            turnout,
            margin,
            position,
        ) in result.all()
    ]


async def search(session: AsyncSession, q: str, search_type: SearchType = SearchType.ALL) -> SearchResponse:
    """Case-insensitive substring search over candidates, constituencies and parties.

    Args:
        session: Database session.
        q: Search text.
        search_type: Which kinds to search.

    Returns:
        SearchResponse with one list per searched kind, each capped at 20.
    """
    q = q.strip()
    if not q:
        msg = "Search query is required"
        raise ValueError(msg)

    # LIKE wildcards in the query match literally
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    response = SearchResponse()

    if search_type in (SearchType.ALL, SearchType.CANDIDATE):
        result = await session.execute(
            select(Candidate.name, Candidate.sex)
            .where(Candidate.name.ilike(pattern, escape="\\"))
            .distinct()
            .order_by(Candidate.name)
            .limit(SEARCH_RESULT_LIMIT)
        )
        response.candidates = [CandidateMatch(name=name, sex=sex) for name, sex in result.all()]

    if search_type in (SearchType.ALL, SearchType.CONSTITUENCY):
        result = await session.execute(
            select(Constituency.name, State.name)
            .join(State, Constituency.state_id == State.id)
            .where(Constituency.name.ilike(pattern, escape="\\"))
            .distinct()
            .order_by(Constituency.name)
            .limit(SEARCH_RESULT_LIMIT)
        )
        response.constituencies = [
            ConstituencyMatch(name=name, state_name=state_name) for name, state_name in result.all()
        ]

    if search_type in (SearchType.ALL, SearchType.PARTY):
        result = await session.execute(
            select(Party.id, Party.name)
            .where(Party.name.ilike(pattern, escape="\\"))
            .order_by(Party.name)
            .limit(SEARCH_RESULT_LIMIT)
        )
        response.parties = [PartyMatch(id=party_id, name=name) for party_id, name in result.all()]

    return response
