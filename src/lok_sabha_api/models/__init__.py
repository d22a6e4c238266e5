"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from lok_sabha_api.models.base import Base
from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State

__all__ = [
    "Base",
    "Candidate",
    "Constituency",
    "Election",
    "Party",
    "Result",
    "State",
]
