"""KPI service: headline numbers for the dashboard cards."""

from sqlalchemy import case, distinct, func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.result import Result
from lok_sabha_api.schemas.metrics import KpiSummary
from lok_sabha_api.services.filters import WINNER_POSITION, Gender, ResultFilters, build_predicates, joined_results


async def get_kpis(session: AsyncSession, filters: ResultFilters) -> KpiSummary:
    """Compute seats, average turnout and women's share under one filter set.

    Each figure applies its own null exclusion: turnout ignores rows
    without a turnout figure and the women's share ignores rows without a
    recorded sex, so the three need not come from equally sized row sets.

    Args:
        session: Database session.
        filters: Filter set; ``year`` is required.

    Returns:
        KpiSummary with zero defaults when nothing matches.

    Raises:
        ValueError: If ``filters.year`` is missing.
    """
    if filters.year is None:
        msg = "year is required for KPIs"
        raise ValueError(msg)

    predicates = await build_predicates(session, filters)

    seats_query = joined_results(func.count(distinct(Constituency.id))).where(
        *predicates, Result.position == WINNER_POSITION
    )
    total_seats = (await session.execute(seats_query)).scalar_one_or_none() or 0

    turnout_query = joined_results(func.avg(Result.turnout_percentage)).where(
        *predicates, Result.turnout_percentage.is_not(None)
    )
    overall_turnout = (await session.execute(turnout_query)).scalar_one_or_none() or 0.0

    women = func.sum(case((Candidate.sex == Gender.FEMALE.value, 1), else_=0))
    women_query = joined_results(women * 100.0 / func.nullif(func.count(Result.id), 0)).where(
        *predicates, Candidate.sex.is_not(None)
    )
    women_pct = (await session.execute(women_query)).scalar_one_or_none() or 0.0

    return KpiSummary(
        total_seats=int(total_seats),
        overall_turnout=float(overall_turnout),
        women_candidates_pct=float(women_pct),
    )
