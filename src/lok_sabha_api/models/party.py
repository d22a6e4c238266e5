"""Party ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from lok_sabha_api.models.base import Base, CreatedAtMixin, IntegerIdMixin


class Party(Base, IntegerIdMixin, CreatedAtMixin):
    """A political party.

    ``party_type_tcpd`` is the free-text TCPD classification (e.g.
    "National Party", "State-based Party", "Local Party").
    """

    __tablename__ = "parties"

    name: Mapped[str] = mapped_column(String(300), unique=True, nullable=False)
    party_type_tcpd: Mapped[str | None] = mapped_column(String(100), nullable=True)
    party_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
