"""Pydantic v2 schemas for the derived election metrics."""

from pydantic import BaseModel, Field


class DistrictWinners(BaseModel):
    """Winning candidates of one party grouped under a district name."""

    district: str
    winners: list[str]


class PartySeatShare(BaseModel):
    """Seats won by a party, with the winners behind the count."""

    party: str
    seats: int
    winners: list[DistrictWinners] = Field(default_factory=list)


class PartyVoteShare(BaseModel):
    """Aggregated vote share of a party over the filtered rows."""

    party: str
    total_votes: float
    vote_share_pct: float


class StatePartyVoteShare(BaseModel):
    """Votes and average row-level vote share of a party within a state."""

    state: str
    party: str
    total_votes: float | None
    avg_vote_share: float | None


class GenderTrendPoint(BaseModel):
    """Candidate count for one (year, sex) pair and its share of that year."""

    year: int
    gender: str
    count: int
    percentage: float


class ContestMargin(BaseModel):
    """Winner and runner-up of one contest with the gap between them."""

    year: int
    state_name: str
    constituency_name: str
    winner_party: str
    winner: str
    winner_votes: float | None
    runner_up_party: str
    runner_up: str
    runner_up_votes: float | None
    margin: float | None
    margin_percentage: float | None


class KpiSummary(BaseModel):
    """Headline indicators for a filter set."""

    total_seats: int
    overall_turnout: float
    women_candidates_pct: float


class PartySeatChange(BaseModel):
    """Seat counts of a party in two years and the difference."""

    party: str
    year1_seats: int
    year2_seats: int
    change: int


class StateCorrelation(BaseModel):
    """Turnout/margin relationship within a state."""

    state: str
    avg_turnout: float
    avg_margin: float
    data_points: int
    correlation: float | None


class PartyTypeVoteShare(BaseModel):
    """Votes of a party bucket (National, Regional, Other) within a year."""

    year: int
    party_type: str
    total_votes: float
    vote_share_pct: float


class EducationWinRate(BaseModel):
    """Win rate of candidates declaring one education level."""

    education: str
    total_candidates: int
    winners: int
    win_rate: float


class StateTurnout(BaseModel):
    """Average turnout percentage of a state."""

    state: str
    turnout_pct: float


class WomenCandidateShare(BaseModel):
    """Share of women among candidates for one (year, state)."""

    year: int
    state: str
    women_count: int
    total_count: int
    percentage: float
