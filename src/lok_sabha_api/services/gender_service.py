"""Gender service: candidate sex trends over time and women's share by state."""

from collections import defaultdict

from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.lib.statistics import percentage
from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State
from lok_sabha_api.schemas.metrics import GenderTrendPoint, WomenCandidateShare
from lok_sabha_api.services.filters import Gender, ResultFilters, build_predicates, joined_results


async def get_gender_trend(session: AsyncSession, filters: ResultFilters) -> list[GenderTrendPoint]:
    """Count candidates per (year, sex) and express each as a share of its year.

    Percentages are normalised within each year over the rows that survive
    the filters, so the sexes present in a year always sum to 100. Sex codes
    other than M/F are passed through unchanged.

    Args:
        session: Database session.
        filters: Filter set; every dimension is optional.

    Returns:
        Points ordered by year, then sex code.
    """
    predicates = await build_predicates(session, filters)
    count = func.count(Result.id).label("count")
    query = (
        joined_results(Election.year, Candidate.sex, count)
        .where(*predicates, Candidate.sex.is_not(None))
        .group_by(Election.year, Candidate.sex)
        .order_by(Election.year, Candidate.sex)
    )
    result = await session.execute(query)
    rows = result.all()

    year_totals: dict[int, int] = defaultdict(int)
    for year, _sex, row_count in rows:
        year_totals[year] += row_count

    return [
        GenderTrendPoint(year=year, gender=sex, count=row_count, percentage=percentage(row_count, year_totals[year]))
        for year, sex, row_count in rows
    ]


async def get_women_candidates(session: AsyncSession, filters: ResultFilters) -> list[WomenCandidateShare]:
    """Share of women among candidates per (year, state).

    Args:
        session: Database session.
        filters: Filter set; ``year`` and ``state`` are the meaningful dimensions.

    Returns:
        Rows ordered by year, then state name.
    """
    predicates = await build_predicates(session, filters)
    women = func.sum(case((Candidate.sex == Gender.FEMALE.value, 1), else_=0))
    query = (
        joined_results(Election.year, State.name, women, func.count(Result.id))
        .where(*predicates, Candidate.sex.is_not(None))
        .group_by(Election.year, State.name)
        .order_by(Election.year, State.name)
    )
    result = await session.execute(query)
    return [
        WomenCandidateShare(
            year=year,
            state=state,
            women_count=women_count or 0,
            total_count=total,
            percentage=percentage(women_count or 0, total),
        )
        for year, state, women_count, total in result.all()
    ]
