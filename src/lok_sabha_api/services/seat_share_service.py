"""Seat share service: seats per party with the winners behind each count."""

from collections.abc import Awaitable, Callable

from loguru import logger
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.core.database import gather_in_sessions
from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.result import Result
from lok_sabha_api.schemas.metrics import DistrictWinners, PartySeatShare
from lok_sabha_api.services.filters import (
    WINNER_POSITION,
    ResultFilters,
    build_predicates,
    joined_results,
    seats_per_party,
)


def _winners_loader(
    predicates: list[ColumnElement[bool]],
    party_id: int,
) -> Callable[[AsyncSession], Awaitable[list[DistrictWinners]]]:
    """Build a coroutine function loading one party's winners grouped by district."""

    async def _load(session: AsyncSession) -> list[DistrictWinners]:
        # One row per (constituency, candidate) pair: namesakes in different
        # constituencies stay separate winners.
        query = (
            joined_results(
                Result.constituency_id,
                Result.candidate_id,
                Constituency.name,
                Constituency.constituency_no,
                Candidate.name,
            )
            .where(*predicates, Result.position == WINNER_POSITION, Result.party_id == party_id)
            .distinct()
            .order_by(Constituency.name, Constituency.constituency_no, Candidate.name)
        )
        result = await session.execute(query)

        grouped: dict[str, list[str]] = {}
        for _constituency_id, _candidate_id, district, _number, candidate in result.all():
            grouped.setdefault(district, []).append(candidate)
        return [DistrictWinners(district=district, winners=names) for district, names in grouped.items()]

    return _load


async def get_seat_share(session: AsyncSession, filters: ResultFilters) -> list[PartySeatShare]:
    """Count seats won per party and attach each party's winners.

    Seats and winner lists both count distinct (constituency, candidate)
    pairs under one predicate list, so each party's seat count equals the
    number of winners listed for it.

    Args:
        session: Database session.
        filters: Filter set; ``year`` is required.

    Returns:
        Parties ordered by seat count descending (empty when nothing matches).

    Raises:
        ValueError: If ``filters.year`` is missing.
    """
    if filters.year is None:
        msg = "year is required for seat share"
        raise ValueError(msg)

    predicates = await build_predicates(session, filters)
    result = await session.execute(seats_per_party(predicates))
    rows = result.all()
    if not rows:
        return []

    logger.debug("Loading winners for {} parties in {}", len(rows), filters.year)
    winners = await gather_in_sessions(session, [_winners_loader(predicates, party_id) for party_id, _, _ in rows])

    return [
        PartySeatShare(party=name, seats=count, winners=party_winners)
        for (_, name, count), party_winners in zip(rows, winners, strict=True)
    ]
