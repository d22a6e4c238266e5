"""Correlation service: turnout versus victory margin per state."""

from collections.abc import Awaitable, Callable

from loguru import logger
from sqlalchemy import ColumnElement, func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.core.database import gather_in_sessions
from lok_sabha_api.lib.statistics import pearson_correlation
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State
from lok_sabha_api.schemas.metrics import StateCorrelation
from lok_sabha_api.services.filters import ResultFilters, build_predicates, joined_results


def _pairs_loader(
    predicates: list[ColumnElement[bool]],
    state_id: int,
) -> Callable[[AsyncSession], Awaitable[float | None]]:
    """Build a coroutine function computing one state's Pearson coefficient."""

    async def _load(session: AsyncSession) -> float | None:
        query = joined_results(Result.turnout_percentage, Result.margin_percentage).where(
            *predicates, Constituency.state_id == state_id
        )
        result = await session.execute(query)
        rows = result.all()
        return pearson_correlation([turnout for turnout, _ in rows], [margin for _, margin in rows])

    return _load


async def get_turnout_margin_correlation(session: AsyncSession, filters: ResultFilters) -> list[StateCorrelation]:
    """Correlate turnout and margin percentages within each state.

    Only rows carrying both percentages take part. The per-state sample
    loads run concurrently; a failure in any of them fails the call.

    Args:
        session: Database session.
        filters: Filter set; ``state`` and ``year`` are the meaningful dimensions.

    Returns:
        One entry per state ordered by state name; ``correlation`` is None
        for states whose sample is degenerate.
    """
    predicates = await build_predicates(session, filters)
    predicates += [Result.turnout_percentage.is_not(None), Result.margin_percentage.is_not(None)]

    query = (
        joined_results(
            State.id,
            State.name,
            func.avg(Result.turnout_percentage),
            func.avg(Result.margin_percentage),
            func.count(Result.id),
        )
        .where(*predicates)
        .group_by(State.id, State.name)
        .order_by(State.name)
    )
    result = await session.execute(query)
    rows = result.all()
    if not rows:
        return []

    logger.debug("Computing turnout/margin correlation for {} states", len(rows))
    coefficients = await gather_in_sessions(session, [_pairs_loader(predicates, state_id) for state_id, *_ in rows])

    return [
        StateCorrelation(
            state=name,
            avg_turnout=avg_turnout,
            avg_margin=avg_margin,
            data_points=data_points,
            correlation=coefficient,
        )
        for (_, name, avg_turnout, avg_margin, data_points), coefficient in zip(rows, coefficients, strict=True)
    ]
