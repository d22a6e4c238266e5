"""Constituency ORM model."""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lok_sabha_api.models.base import Base, CreatedAtMixin, IntegerIdMixin


class Constituency(Base, IntegerIdMixin, CreatedAtMixin):
    """A parliamentary constituency row.

    Rows sharing a ``name`` form one district across delimitations.
    """

    __tablename__ = "constituencies"

    state_id: Mapped[int] = mapped_column(Integer, ForeignKey("states.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    constituency_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    constituency_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    sub_region: Mapped[str | None] = mapped_column(String(200), nullable=True)
    assembly_no: Mapped[int | None] = mapped_column(Integer, nullable=True)

    state: Mapped["State"] = relationship(back_populates="constituencies")  # noqa: F821

    __table_args__ = (
        UniqueConstraint("state_id", "name", "constituency_no", name="uq_constituency_state_name_no"),
        Index("idx_constituencies_state_id", "state_id"),
        Index("idx_constituencies_name", "name"),
    )
