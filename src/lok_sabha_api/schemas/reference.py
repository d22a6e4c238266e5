"""Pydantic v2 schemas for reference data, row listings and search."""

from pydantic import BaseModel


class StateResponse(BaseModel):
    """A state."""

    model_config = {"from_attributes": True}

    id: int
    name: str


class PartyResponse(BaseModel):
    """A party with its TCPD classification."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    party_type_tcpd: str | None = None


class DistrictResponse(BaseModel):
    """A district: constituency rows sharing a name, keyed by the lowest row id."""

    id: int
    name: str
    state_name: str


class ConstituencyResponse(BaseModel):
    """A single constituency row."""

    id: int
    name: str
    constituency_no: int | None = None
    constituency_type: str | None = None
    state_id: int
    state_name: str


class ElectionResultRow(BaseModel):
    """One candidate result with its dimension labels."""

    year: int
    state_name: str
    constituency_name: str
    party_name: str
    candidate_name: str
    gender: str | None = None
    votes: float | None = None
    vote_share_percentage: float | None = None
    turnout_percentage: float | None = None
    margin_percentage: float | None = None
    position: int | None = None


class CandidateMatch(BaseModel):
    """Candidate search hit."""

    name: str
    sex: str | None = None


class ConstituencyMatch(BaseModel):
    """Constituency search hit."""

    name: str
    state_name: str


class PartyMatch(BaseModel):
    """Party search hit."""

    id: int
    name: str


class SearchResponse(BaseModel):
    """Search hits grouped by kind; kinds not searched are omitted."""

    candidates: list[CandidateMatch] | None = None
    constituencies: list[ConstituencyMatch] | None = None
    parties: list[PartyMatch] | None = None
