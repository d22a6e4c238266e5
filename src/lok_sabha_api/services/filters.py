"""Filter resolution shared by the metric services.

A ``ResultFilters`` value carries the canonical query dimensions (year,
state, party, gender, district, constituency). ``build_predicates`` turns it
into a list of SQLAlchemy boolean clauses over the joined
results → elections → constituencies → candidates → parties rowset, so any
subset of filters composes by plain conjunction.

A *district* is given as a constituency row id but stands for every
constituency row sharing that row's name.
"""

from dataclasses import dataclass, replace
from enum import StrEnum

from loguru import logger
from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State

VALID_YEAR_MIN_RESULTS = 1000
WINNER_POSITION = 1
RUNNER_UP_POSITION = 2


class Gender(StrEnum):
    """Candidate sex codes used by the source data."""

    MALE = "M"
    FEMALE = "F"


@dataclass(frozen=True)
class ResultFilters:
    """Optional filter dimensions applied to result rows.

    Attributes:
        year: Election year.
        state: State id.
        party: Party id.
        gender: Candidate sex code.
        district: Constituency id whose name group should be matched.
        constituency: Exact constituency id.
        min_year_results: Result rows a year needs to count as valid.
    """

    year: int | None = None
    state: int | None = None
    party: int | None = None
    gender: str | None = None
    district: int | None = None
    constituency: int | None = None
    min_year_results: int = VALID_YEAR_MIN_RESULTS

    def without(self, *names: str) -> "ResultFilters":
        """Return a copy with the named dimensions cleared."""
        return replace(self, **dict.fromkeys(names))


def valid_years_subquery(min_results: int = VALID_YEAR_MIN_RESULTS) -> Select[tuple[int]]:
    """Select the election years backed by at least ``min_results`` result rows.

    Uses its own aliases so it never correlates with an enclosing query
    that also joins elections or results.
    """
    election = aliased(Election)
    result = aliased(Result)
    return (
        select(election.year)
        .join(result, result.election_id == election.id)
        .group_by(election.year)
        .having(func.count(result.id) >= min_results)
    )


def valid_year_predicate(min_results: int = VALID_YEAR_MIN_RESULTS) -> ColumnElement[bool]:
    """Clause restricting ``Election.year`` to valid years."""
    return Election.year.in_(valid_years_subquery(min_results))


async def resolve_district(session: AsyncSession, district_id: int) -> str | None:
    """Resolve a district id (a constituency row id) to its constituency name.

    Args:
        session: Database session.
        district_id: Constituency row id standing for the district.

    Returns:
        The shared constituency name, or None when the id matches no row.
    """
    result = await session.execute(select(Constituency.name).where(Constituency.id == district_id))
    return result.scalar_one_or_none()


async def build_predicates(
    session: AsyncSession,
    filters: ResultFilters,
    *,
    include_valid_year: bool = True,
) -> list[ColumnElement[bool]]:
    """Build the WHERE clauses for ``filters``.

    The clauses reference Result, Election, Constituency, Candidate and
    Party, so the statement they are applied to must join those tables
    (see ``joined_results``). An unresolvable district is dropped rather
    than treated as an error.

    Args:
        session: Database session, used only to resolve the district name.
        filters: Filter values.
        include_valid_year: Whether to add the valid-year restriction.

    Returns:
        List of boolean clauses to AND together.
    """
    predicates: list[ColumnElement[bool]] = []
    if include_valid_year:
        predicates.append(valid_year_predicate(filters.min_year_results))
    if filters.year is not None:
        predicates.append(Election.year == filters.year)
    if filters.state is not None:
        predicates.append(Constituency.state_id == filters.state)
    if filters.party is not None:
        predicates.append(Result.party_id == filters.party)
    if filters.gender is not None:
        predicates.append(Candidate.sex == str(filters.gender))
    if filters.district is not None:
        district_name = await resolve_district(session, filters.district)
        if district_name is None:
            logger.debug("District {} did not resolve to a constituency, ignoring filter", filters.district)
        else:
            predicates.append(Constituency.name == district_name)
    if filters.constituency is not None:
        predicates.append(Constituency.id == filters.constituency)
    return predicates


def joined_results(*columns: object) -> Select:
    """Select ``columns`` from results joined to every dimension table."""
    return (
        select(*columns)
        .select_from(Result)
        .join(Election, Result.election_id == Election.id)
        .join(Constituency, Result.constituency_id == Constituency.id)
        .join(State, Constituency.state_id == State.id)
        .join(Candidate, Result.candidate_id == Candidate.id)
        .join(Party, Result.party_id == Party.id)
    )


async def filtered_results(
    session: AsyncSession,
    filters: ResultFilters,
    *columns: object,
) -> Select:
    """Joined select of ``columns`` with every predicate for ``filters`` applied."""
    predicates = await build_predicates(session, filters)
    return joined_results(*columns).where(*predicates)


def seats_per_party(predicates: list[ColumnElement[bool]]) -> Select[tuple[int, str, int]]:
    """Select ``(party id, party name, seats)`` for winners matching ``predicates``.

    A seat is one distinct (constituency, candidate) winner pair, so a
    by-election won by the sitting member does not count twice.
    """
    winners = (
        joined_results(Result.party_id, Result.constituency_id, Result.candidate_id)
        .where(*predicates, Result.position == WINNER_POSITION)
        .distinct()
        .subquery()
    )
    seats = func.count().label("seats")
    return (
        select(Party.id, Party.name, seats)
        .join(winners, winners.c.party_id == Party.id)
        .group_by(Party.id, Party.name)
        .order_by(seats.desc(), Party.name)
    )
