"""Election ORM model: one row per poll configuration within a year."""

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lok_sabha_api.models.base import Base, CreatedAtMixin, IntegerIdMixin


class Election(Base, IntegerIdMixin, CreatedAtMixin):
    """An election event. A year may have several rows (phases, delimitations)."""

    __tablename__ = "elections"

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int | None] = mapped_column(Integer, nullable=True)
    poll_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    delimid: Mapped[int | None] = mapped_column(Integer, nullable=True)
    election_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint("year", "month", "poll_no", "delimid", name="uq_election_year_month_poll_delim"),
        Index("idx_elections_year", "year"),
    )
