"""State ORM model: root of the state → constituency hierarchy."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lok_sabha_api.models.base import Base, CreatedAtMixin, IntegerIdMixin


class State(Base, IntegerIdMixin, CreatedAtMixin):
    """An Indian state or union territory."""

    __tablename__ = "states"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)

    constituencies: Mapped[list["Constituency"]] = relationship(  # noqa: F821
        back_populates="state", cascade="all, delete-orphan"
    )
