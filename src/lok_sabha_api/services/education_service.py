"""Education service: win rate by declared education level."""

from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.lib.statistics import percentage
from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.result import Result
from lok_sabha_api.schemas.metrics import EducationWinRate
from lok_sabha_api.services.filters import WINNER_POSITION, ResultFilters, build_predicates, joined_results


async def get_education_win_rates(session: AsyncSession, filters: ResultFilters) -> list[EducationWinRate]:
    """Group candidacies by trimmed education label and compute win rates.

    Blank or whitespace-only labels are left out entirely rather than
    pooled under an "Unknown" bucket.

    Args:
        session: Database session.
        filters: Filter set; usually empty.

    Returns:
        Education levels ordered by win rate descending.
    """
    predicates = await build_predicates(session, filters)
    education = func.trim(Candidate.myneta_education).label("education")
    winners = func.sum(case((Result.position == WINNER_POSITION, 1), else_=0))
    query = (
        joined_results(education, func.count(Result.id), winners)
        .where(
            *predicates,
            Candidate.myneta_education.is_not(None),
            func.trim(Candidate.myneta_education) != "",
            Result.position.is_not(None),
        )
        .group_by(education)
    )
    result = await session.execute(query)

    stats = [
        EducationWinRate(
            education=label,
            total_candidates=total,
            winners=won or 0,
            win_rate=percentage(won or 0, total),
        )
        for label, total, won in result.all()
    ]
    stats.sort(key=lambda row: (-row.win_rate, row.education))
    return stats
