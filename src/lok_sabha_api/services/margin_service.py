"""Margin service: narrowest victories from winner/runner-up pairs."""

from sqlalchemy import Select, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State
from lok_sabha_api.schemas.metrics import ContestMargin
from lok_sabha_api.services.filters import (
    RUNNER_UP_POSITION,
    WINNER_POSITION,
    ResultFilters,
    build_predicates,
    joined_results,
)

DEFAULT_MARGIN_LIMIT = 10
CLOSEST_CONTESTS_LIMIT = 10


def _contest_pairs() -> Select:
    """Join every winner row to the runner-up row of the same contest.

    The winner side uses the unaliased tables so the shared filter
    predicates apply to it; contests without a runner-up drop out of the
    inner join.
    """
    runner_up = aliased(Result)
    runner_up_party = aliased(Party)
    runner_up_candidate = aliased(Candidate)
    return (
        joined_results(
            Election.year,
            State.name,
            Constituency.name,
            Party.name,
            Candidate.name,
            Result.votes,
            runner_up_party.name,
            runner_up_candidate.name,
            runner_up.votes,
            (Result.votes - runner_up.votes),
            Result.margin_percentage,
        )
        .join(
            runner_up,
            and_(
                runner_up.election_id == Result.election_id,
                runner_up.constituency_id == Result.constituency_id,
                runner_up.position == RUNNER_UP_POSITION,
            ),
        )
        .join(runner_up_party, runner_up.party_id == runner_up_party.id)
        .join(runner_up_candidate, runner_up.candidate_id == runner_up_candidate.id)
        .where(Result.position == WINNER_POSITION)
    )


def _to_margin(row: tuple) -> ContestMargin:
    (
        year,
        state_name,
        constituency_name,
        winner_party,
        winner,
        winner_votes,
        runner_up_party,
        runner_up,
        runner_up_votes,
        margin,
        margin_percentage,
    ) = row
    return ContestMargin(
        year=year,
        state_name=state_name,
        constituency_name=constituency_name,
        winner_party=winner_party,
        winner=winner,
        winner_votes=winner_votes,
        runner_up_party=runner_up_party,
        runner_up=runner_up,
        runner_up_votes=runner_up_votes,
        margin=margin,
        margin_percentage=margin_percentage,
    )


async def get_margins(
    session: AsyncSession,
    filters: ResultFilters,
    *,
    limit: int = DEFAULT_MARGIN_LIMIT,
) -> list[ContestMargin]:
    """Return the closest contests, narrowest margin percentage first.

    Contests with no stored margin percentage sort after every contest
    that has one.

    Args:
        session: Database session.
        filters: Filter set applied to the winner row.
        limit: Maximum number of contests.

    Returns:
        Contests in non-decreasing margin percentage order.
    """
    if limit < 1:
        msg = "limit must be a positive integer"
        raise ValueError(msg)

    predicates = await build_predicates(session, filters)
    query = (
        _contest_pairs()
        .where(*predicates)
        .order_by(Result.margin_percentage.is_(None), Result.margin_percentage.asc(), Constituency.name)
        .limit(limit)
    )
    result = await session.execute(query)
    return [_to_margin(row) for row in result.all()]


async def get_closest_contests(session: AsyncSession, filters: ResultFilters) -> list[ContestMargin]:
    """Return the ten closest contests that carry a margin percentage.

    Args:
        session: Database session.
        filters: Filter set; ``year`` is required.

    Returns:
        Up to ten contests, narrowest first.
    """
    if filters.year is None:
        msg = "year is required for closest contests"
        raise ValueError(msg)

    predicates = await build_predicates(session, filters)
    query = (
        _contest_pairs()
        .where(*predicates, Result.margin_percentage.is_not(None))
        .order_by(Result.margin_percentage.asc(), Constituency.name)
        .limit(CLOSEST_CONTESTS_LIMIT)
    )
    result = await session.execute(query)
    return [_to_margin(row) for row in result.all()]
