"""Tests for turnout by state."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.services.filters import ResultFilters
from lok_sabha_api.services.turnout_service import get_highest_turnout, get_turnout_by_state
from tests.seeding import ResultSeeder


def _filters(**kwargs: object) -> ResultFilters:
    return ResultFilters(min_year_results=1, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
async def seeded(seeder: ResultSeeder) -> ResultSeeder:
    rows = [
        ("Lakshadweep", 85.2),
        ("Lakshadweep", 85.4),
        ("Bihar", 57.0),
        ("Bihar", 59.0),
        ("Bihar", None),
        ("Tripura", 82.0),
    ]
    for i, (state, turnout) in enumerate(rows):
        await seeder.result(
            year=2019,
            state=state,
            constituency=f"{state} {i}",
            candidate=f"C{i}",
            party="P",
            turnout_percentage=turnout,
        )
    await seeder.commit()
    return seeder


class TestTurnoutByState:
    """Tests for get_turnout_by_state."""

    @pytest.mark.asyncio
    async def test_ordered_descending_ignoring_nulls(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        rows = await get_turnout_by_state(async_session, _filters(year=2019))
        assert [r.state for r in rows] == ["Lakshadweep", "Tripura", "Bihar"]
        assert rows[0].turnout_pct == pytest.approx(85.3)
        assert rows[-1].turnout_pct == pytest.approx(58.0)

    @pytest.mark.asyncio
    async def test_year_required(self, async_session: AsyncSession) -> None:
        with pytest.raises(ValueError, match="year is required"):
            await get_turnout_by_state(async_session, _filters())


class TestHighestTurnout:
    """Tests for get_highest_turnout."""

    @pytest.mark.asyncio
    async def test_top_state(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        top = await get_highest_turnout(async_session, _filters(year=2019))
        assert top is not None
        assert top.state == "Lakshadweep"

    @pytest.mark.asyncio
    async def test_none_when_empty(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        assert await get_highest_turnout(async_session, _filters(year=2004)) is None
