"""Turnout service: average turnout per state."""

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State
from lok_sabha_api.schemas.metrics import StateTurnout
from lok_sabha_api.services.filters import ResultFilters, build_predicates, joined_results


async def get_turnout_by_state(
    session: AsyncSession,
    filters: ResultFilters,
    *,
    limit: int | None = None,
) -> list[StateTurnout]:
    """Average the stored turnout percentage per state, highest first.

    Args:
        session: Database session.
        filters: Filter set; ``year`` is required.
        limit: Optional cap on the number of states returned.

    Returns:
        States ordered by average turnout descending.
    """
    if filters.year is None:
        msg = "year is required for turnout"
        raise ValueError(msg)

    predicates = await build_predicates(session, filters)
    turnout = func.avg(Result.turnout_percentage).label("turnout_pct")
    query = (
        joined_results(State.name, turnout)
        .where(*predicates, Result.turnout_percentage.is_not(None))
        .group_by(State.name)
        .order_by(turnout.desc(), State.name)
    )
    if limit is not None:
        query = query.limit(limit)
    result = await session.execute(query)
    return [StateTurnout(state=state, turnout_pct=value) for state, value in result.all()]


async def get_highest_turnout(session: AsyncSession, filters: ResultFilters) -> StateTurnout | None:
    """Return the state with the highest average turnout, or None."""
    rows = await get_turnout_by_state(session, filters, limit=1)
    return rows[0] if rows else None
