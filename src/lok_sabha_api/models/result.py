"""Result ORM model: the fact table, one row per candidate per constituency per election."""

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lok_sabha_api.models.base import Base, CreatedAtMixin, IntegerIdMixin


class Result(Base, IntegerIdMixin, CreatedAtMixin):
    """A candidate's result in one constituency contest.

    ``position`` 1 is the winner and 2 the runner-up. Percentage columns are
    carried from the source data rather than recomputed.
    """

    __tablename__ = "results"

    election_id: Mapped[int] = mapped_column(Integer, ForeignKey("elections.id", ondelete="CASCADE"), nullable=False)
    constituency_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("constituencies.id", ondelete="CASCADE"), nullable=False
    )
    candidate_id: Mapped[int] = mapped_column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False)
    party_id: Mapped[int] = mapped_column(Integer, ForeignKey("parties.id", ondelete="CASCADE"), nullable=False)

    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    votes: Mapped[float | None] = mapped_column(Float, nullable=True)
    candidate_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    valid_votes: Mapped[float | None] = mapped_column(Float, nullable=True)
    electors: Mapped[float | None] = mapped_column(Float, nullable=True)
    n_cand: Mapped[int | None] = mapped_column(Integer, nullable=True)

    turnout_percentage: Mapped[float | None] = mapped_column(Float, nullable=True)
    vote_share_percentage: Mapped[float | None] = mapped_column(Float, nullable=True)
    deposit_lost: Mapped[str | None] = mapped_column(String(10), nullable=True)
    margin: Mapped[float | None] = mapped_column(Float, nullable=True)
    margin_percentage: Mapped[float | None] = mapped_column(Float, nullable=True)
    enop: Mapped[float | None] = mapped_column(Float, nullable=True)

    last_poll: Mapped[int | None] = mapped_column(Integer, nullable=True)
    contested: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_party: Mapped[str | None] = mapped_column(String(300), nullable=True)
    last_constituency_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    same_constituency: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    same_party: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    no_terms: Mapped[float | None] = mapped_column(Float, nullable=True)
    turncoat: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    incumbent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recontest: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    election: Mapped["Election"] = relationship()  # noqa: F821
    constituency: Mapped["Constituency"] = relationship()  # noqa: F821
    candidate: Mapped["Candidate"] = relationship()  # noqa: F821
    party: Mapped["Party"] = relationship()  # noqa: F821

    __table_args__ = (
        Index("idx_results_election_id", "election_id"),
        Index("idx_results_constituency_id", "constituency_id"),
        Index("idx_results_party_id", "party_id"),
        Index("idx_results_candidate_id", "candidate_id"),
        Index("idx_results_position", "position"),
        Index("idx_results_turnout", "turnout_percentage"),
        Index("idx_results_vote_share", "vote_share_percentage"),
        Index("idx_results_margin", "margin_percentage"),
    )
