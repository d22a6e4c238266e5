"""Tests for the per-state turnout/margin correlation."""

from unittest.mock import patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.services.correlation_service import get_turnout_margin_correlation
from lok_sabha_api.services.filters import ResultFilters
from tests.seeding import ResultSeeder


def _filters(**kwargs: object) -> ResultFilters:
    return ResultFilters(min_year_results=1, **kwargs)  # type: ignore[arg-type]


async def _rows(seeder: ResultSeeder, state: str, pairs: list[tuple[float | None, float | None]]) -> None:
    for i, (turnout, margin) in enumerate(pairs):
        await seeder.result(
            year=2019,
            state=state,
            constituency=f"{state} {i}",
            candidate=f"{state} candidate {i}",
            party="P",
            position=1,
            turnout_percentage=turnout,
            margin_percentage=margin,
        )


class TestTurnoutMarginCorrelation:
    """Tests for get_turnout_margin_correlation."""

    @pytest.mark.asyncio
    async def test_zero_variance_gives_null(self, async_session: AsyncSession, seeder: ResultSeeder) -> None:
        await _rows(seeder, "Sikkim", [(70.0, 5.0), (70.0, 5.0), (70.0, 5.0)])
        await seeder.commit()

        [row] = await get_turnout_margin_correlation(async_session, _filters())

        assert row.state == "Sikkim"
        assert row.correlation is None
        assert row.data_points == 3
        assert row.avg_turnout == pytest.approx(70.0)
        assert row.avg_margin == pytest.approx(5.0)

    @pytest.mark.asyncio
    async def test_coefficients_per_state(self, async_session: AsyncSession, seeder: ResultSeeder) -> None:
        await _rows(seeder, "Kerala", [(60.0, 2.0), (70.0, 4.0), (80.0, 6.0)])
        await _rows(seeder, "Assam", [(60.0, 9.0), (70.0, 5.0), (80.0, 1.0)])
        await _rows(seeder, "Goa", [(61.0, 3.0), (75.0, 12.0), (68.0, 1.0), (80.0, 7.0)])
        await seeder.commit()

        rows = await get_turnout_margin_correlation(async_session, _filters())

        assert [r.state for r in rows] == ["Assam", "Goa", "Kerala"]
        by_state = {r.state: r.correlation for r in rows}
        assert by_state["Kerala"] == pytest.approx(1.0)
        assert by_state["Assam"] == pytest.approx(-1.0)
        assert -1.0 <= by_state["Goa"] <= 1.0

    @pytest.mark.asyncio
    async def test_rows_missing_either_value_are_skipped(
        self, async_session: AsyncSession, seeder: ResultSeeder
    ) -> None:
        await _rows(seeder, "Kerala", [(60.0, 2.0), (70.0, 4.0), (None, 9.0), (75.0, None)])
        await seeder.commit()

        [row] = await get_turnout_margin_correlation(async_session, _filters())
        assert row.data_points == 2
        assert row.correlation == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_state_filter(self, async_session: AsyncSession, seeder: ResultSeeder) -> None:
        await _rows(seeder, "Kerala", [(60.0, 2.0), (70.0, 4.0)])
        await _rows(seeder, "Assam", [(60.0, 9.0), (70.0, 5.0)])
        await seeder.commit()

        assam = (await seeder.state("Assam")).id
        rows = await get_turnout_margin_correlation(async_session, _filters(state=assam))
        assert [r.state for r in rows] == ["Assam"]

    @pytest.mark.asyncio
    async def test_empty(self, async_session: AsyncSession) -> None:
        assert await get_turnout_margin_correlation(async_session, _filters()) == []

    @pytest.mark.asyncio
    async def test_one_failed_state_fails_all(self, async_session: AsyncSession, seeder: ResultSeeder) -> None:
        await _rows(seeder, "Kerala", [(60.0, 2.0), (70.0, 4.0)])
        await seeder.commit()

        with (
            patch(
                "lok_sabha_api.services.correlation_service.pearson_correlation",
                side_effect=ArithmeticError("bad sample"),
            ),
            pytest.raises(ArithmeticError, match="bad sample"),
        ):
            await get_turnout_margin_correlation(async_session, _filters())
