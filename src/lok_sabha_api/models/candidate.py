"""Candidate ORM model.

Candidates are keyed by name only, so two people sharing a name collapse
into one row. Aggregate metrics are unaffected; candidate-level views are.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from lok_sabha_api.models.base import Base, CreatedAtMixin, IntegerIdMixin


class Candidate(Base, IntegerIdMixin, CreatedAtMixin):
    """A contesting candidate with MyNeta/TCPD profile fields."""

    __tablename__ = "candidates"

    name: Mapped[str] = mapped_column(String(300), nullable=False)
    sex: Mapped[str | None] = mapped_column(String(5), nullable=True)
    myneta_education: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tcpd_prof_main: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tcpd_prof_main_desc: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tcpd_prof_second: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tcpd_prof_second_desc: Mapped[str | None] = mapped_column(String(500), nullable=True)
    pid: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __table_args__ = (Index("idx_candidates_name", "name"),)
