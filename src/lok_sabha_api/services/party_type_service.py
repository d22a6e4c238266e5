"""Party type service: National vs Regional vs Other vote share over time."""

from collections import defaultdict
from enum import StrEnum

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.lib.statistics import percentage
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.schemas.metrics import PartyTypeVoteShare
from lok_sabha_api.services.filters import ResultFilters, build_predicates, joined_results


class PartyType(StrEnum):
    """Derived party buckets."""

    NATIONAL = "National"
    REGIONAL = "Regional"
    OTHER = "Other"


def classify_party_type(party_type_tcpd: str | None) -> PartyType:
    """Bucket a TCPD party type by case-insensitive substring match."""
    if not party_type_tcpd:
        return PartyType.OTHER
    lowered = party_type_tcpd.lower()
    if "national" in lowered:
        return PartyType.NATIONAL
    if "regional" in lowered:
        return PartyType.REGIONAL
    return PartyType.OTHER


async def get_national_vs_regional(session: AsyncSession, filters: ResultFilters) -> list[PartyTypeVoteShare]:
    """Share of each year's votes going to National, Regional and Other parties.

    The denominator is the year's total over all parties; only rows with a
    positive vote count contribute to either side.

    Args:
        session: Database session.
        filters: Filter set; usually empty.

    Returns:
        Rows ordered by year, then bucket name.
    """
    predicates = await build_predicates(session, filters)
    query = (
        joined_results(Election.year, Party.party_type_tcpd, func.sum(Result.votes))
        .where(*predicates, Result.votes > 0)
        .group_by(Election.year, Party.party_type_tcpd)
    )
    result = await session.execute(query)

    bucket_votes: dict[tuple[int, PartyType], float] = defaultdict(float)
    year_totals: dict[int, float] = defaultdict(float)
    for year, party_type_tcpd, votes in result.all():
        bucket_votes[(year, classify_party_type(party_type_tcpd))] += votes
        year_totals[year] += votes

    return [
        PartyTypeVoteShare(
            year=year,
            party_type=party_type,
            total_votes=votes,
            vote_share_pct=percentage(votes, year_totals[year]),
        )
        for (year, party_type), votes in sorted(bucket_votes.items())
    ]
