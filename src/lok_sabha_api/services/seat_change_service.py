"""Seat change service: per-party seat swing between two election years."""

from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.schemas.metrics import PartySeatChange
from lok_sabha_api.services.filters import (
    VALID_YEAR_MIN_RESULTS,
    ResultFilters,
    build_predicates,
    seats_per_party,
)


async def count_seats_by_party(session: AsyncSession, filters: ResultFilters) -> dict[str, int]:
    """Map party name to the number of seats won under ``filters``."""
    predicates = await build_predicates(session, filters)
    result = await session.execute(seats_per_party(predicates))
    return {party: seats for _, party, seats in result.all()}


async def get_seat_changes(
    session: AsyncSession,
    year1: int,
    year2: int,
    *,
    min_year_results: int = VALID_YEAR_MIN_RESULTS,
) -> list[PartySeatChange]:
    """Compare seats per party between two years.

    The two years are counted independently and merged by party name, so a
    party that won seats in only one of them still appears, with zero
    seats for the other year.

    Args:
        session: Database session.
        year1: Baseline year.
        year2: Comparison year.
        min_year_results: Result rows a year needs to count as valid.

    Returns:
        One row per party, biggest gain first.
    """
    first = await count_seats_by_party(session, ResultFilters(year=year1, min_year_results=min_year_results))
    second = await count_seats_by_party(session, ResultFilters(year=year2, min_year_results=min_year_results))

    changes = [
        PartySeatChange(
            party=party,
            year1_seats=first.get(party, 0),
            year2_seats=second.get(party, 0),
            change=second.get(party, 0) - first.get(party, 0),
        )
        for party in first.keys() | second.keys()
    ]
    changes.sort(key=lambda row: (-row.change, row.party))
    return changes
