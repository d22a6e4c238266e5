"""Vote share service: party vote shares, aggregated or broken down by state."""

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.lib.statistics import percentage
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State
from lok_sabha_api.schemas.metrics import PartyVoteShare, StatePartyVoteShare
from lok_sabha_api.services.filters import ResultFilters, build_predicates, joined_results


async def get_aggregated_vote_share(session: AsyncSession, filters: ResultFilters) -> list[PartyVoteShare]:
    """Compute each party's share of the votes cast in the filtered rows.

    The denominator is the vote total under the same filters minus the
    party filter, so shares re-normalise over the selected slice and sum to
    100 when no party is selected. A zero total is replaced by 1.

    Args:
        session: Database session.
        filters: Filter set; ``year`` is required.

    Returns:
        Parties ordered by total votes descending.
    """
    if filters.year is None:
        msg = "year is required for vote share"
        raise ValueError(msg)

    denominator_predicates = await build_predicates(session, filters.without("party"))
    total_query = joined_results(func.sum(Result.votes)).where(*denominator_predicates, Result.votes.is_not(None))
    total_votes = (await session.execute(total_query)).scalar_one_or_none() or 1

    predicates = await build_predicates(session, filters)
    party_votes = func.sum(Result.votes).label("total_votes")
    query = (
        joined_results(Party.name, party_votes)
        .where(*predicates, Result.votes.is_not(None))
        .group_by(Party.name)
        .order_by(party_votes.desc(), Party.name)
    )
    result = await session.execute(query)
    return [
        PartyVoteShare(party=name, total_votes=votes, vote_share_pct=percentage(votes, total_votes))
        for name, votes in result.all()
    ]


async def get_vote_share_by_state(session: AsyncSession, filters: ResultFilters) -> list[StatePartyVoteShare]:
    """Sum votes and average the stored row-level vote share per (state, party).

    ``avg_vote_share`` averages the precomputed ``vote_share_percentage``
    column; it is not a ratio of sums.

    Args:
        session: Database session.
        filters: Filter set; ``year`` is required.

    Returns:
        Rows ordered by state name, then total votes descending.
    """
    if filters.year is None:
        msg = "year is required for vote share"
        raise ValueError(msg)

    predicates = await build_predicates(session, filters)
    total_votes = func.sum(Result.votes).label("total_votes")
    query = (
        joined_results(State.name, Party.name, total_votes, func.avg(Result.vote_share_percentage))
        .where(*predicates)
        .group_by(State.name, Party.name)
        .order_by(State.name, total_votes.desc(), Party.name)
    )
    result = await session.execute(query)
    return [
        StatePartyVoteShare(state=state, party=party, total_votes=votes, avg_vote_share=avg_share)
        for state, party, votes, avg_share in result.all()
    ]


async def get_vote_share(
    session: AsyncSession,
    filters: ResultFilters,
    *,
    aggregate: bool = False,
) -> list[PartyVoteShare] | list[StatePartyVoteShare]:
    """Dispatch to the aggregated (party only) or by-state vote share."""
    if aggregate:
        return await get_aggregated_vote_share(session, filters)
    return await get_vote_share_by_state(session, filters)
