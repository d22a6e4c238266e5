"""Tests for win rate by education level."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.services.education_service import get_education_win_rates
from lok_sabha_api.services.filters import ResultFilters
from tests.seeding import ResultSeeder


class TestEducationWinRates:
    """Tests for get_education_win_rates."""

    @pytest.fixture
    async def seeded(self, seeder: ResultSeeder) -> ResultSeeder:
        rows = [
            ("A", "Graduate", 1),
            ("B", " Graduate ", 2),
            ("C", "Graduate", 3),
            ("D", "Post Graduate", 1),
            ("E", "Post Graduate", 2),
            ("F", "12th Pass", 2),
            ("G", "", 1),
            ("H", "   ", 1),
            ("I", None, 1),
            ("J", "Doctorate", None),
        ]
        for i, (name, education, position) in enumerate(rows):
            await seeder.result(
                year=2019,
                state="India",
                constituency=f"Seat {i}",
                candidate=name,
                party="P",
                education=education,
                position=position,
            )
        await seeder.commit()
        return seeder

    @pytest.mark.asyncio
    async def test_rates_sorted_descending(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        rows = await get_education_win_rates(async_session, ResultFilters(min_year_results=1))

        assert [(r.education, r.total_candidates, r.winners) for r in rows] == [
            ("Post Graduate", 2, 1),
            ("Graduate", 3, 1),
            ("12th Pass", 1, 0),
        ]
        assert rows[0].win_rate == pytest.approx(50.0)
        assert rows[1].win_rate == pytest.approx(100 / 3)

    @pytest.mark.asyncio
    async def test_blank_labels_excluded(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        labels = {r.education for r in await get_education_win_rates(async_session, ResultFilters(min_year_results=1))}
        assert "" not in labels
        assert "Unknown" not in labels
        assert "Doctorate" not in labels
