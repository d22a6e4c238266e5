"""Tests for filter resolution: valid years, district expansion and predicate composition."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.models import Constituency, Result
from lok_sabha_api.services.filters import (
    Gender,
    ResultFilters,
    build_predicates,
    filtered_results,
    joined_results,
    resolve_district,
    valid_years_subquery,
)
from tests.seeding import ResultSeeder


async def _count(session: AsyncSession, filters: ResultFilters) -> int:
    query = await filtered_results(session, filters, func.count(Result.id))
    return (await session.execute(query)).scalar_one()


async def _constituency_id(session: AsyncSession, name: str, number: int) -> int:
    stmt = select(Constituency.id).where(Constituency.name == name, Constituency.constituency_no == number)
    return (await session.execute(stmt)).scalar_one()


@pytest.fixture
async def seeded(seeder: ResultSeeder) -> ResultSeeder:
    """Two years; one district name shared across two states and delimitations."""
    await seeder.result(
        year=2019, state="Maharashtra", constituency="Aurangabad", number=19, candidate="A", party="JDU", position=1
    )
    await seeder.result(
        year=2019, state="Bihar", constituency="Aurangabad", number=37, candidate="B", party="RJD", position=1
    )
    await seeder.result(
        year=2019, state="Bihar", constituency="Gaya", number=38, candidate="C", party="JDU", position=1, sex="F"
    )
    await seeder.result(
        year=2014, state="Bihar", constituency="Gaya", number=38, candidate="D", party="RJD", position=1
    )
    await seeder.commit()
    return seeder


class TestResultFilters:
    """Tests for the ResultFilters value."""

    def test_without_clears_named_dimensions(self) -> None:
        filters = ResultFilters(year=2019, party=3, state=4, min_year_results=5)
        cleared = filters.without("party", "state")
        assert cleared == ResultFilters(year=2019, min_year_results=5)
        assert filters.party == 3

    def test_default_threshold(self) -> None:
        assert ResultFilters().min_year_results == 1000


class TestValidYears:
    """Tests for the valid-year subquery."""

    @pytest.mark.asyncio
    async def test_threshold_applies_per_year(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        years = (await async_session.execute(valid_years_subquery(2))).scalars().all()
        assert list(years) == [2019]

    @pytest.mark.asyncio
    async def test_low_threshold_keeps_all_years(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        years = (await async_session.execute(valid_years_subquery(1))).scalars().all()
        assert sorted(years) == [2014, 2019]

    @pytest.mark.asyncio
    async def test_default_threshold_excludes_small_years(
        self, async_session: AsyncSession, seeded: ResultSeeder
    ) -> None:
        assert await _count(async_session, ResultFilters()) == 0
        assert await _count(async_session, ResultFilters(year=2019)) == 0

    @pytest.mark.asyncio
    async def test_predicate_can_be_skipped(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        predicates = await build_predicates(async_session, ResultFilters(), include_valid_year=False)
        query = joined_results(func.count(Result.id)).where(*predicates)
        assert (await async_session.execute(query)).scalar_one() == 4


class TestDistrictResolution:
    """Tests for resolve_district and the district filter."""

    @pytest.mark.asyncio
    async def test_resolves_to_name(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        district = await _constituency_id(async_session, "Aurangabad", 37)
        assert await resolve_district(async_session, district) == "Aurangabad"

    @pytest.mark.asyncio
    async def test_unknown_id(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        assert await resolve_district(async_session, 99_999) is None

    @pytest.mark.asyncio
    async def test_district_expands_across_states(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        district = await _constituency_id(async_session, "Aurangabad", 19)
        assert await _count(async_session, ResultFilters(district=district, min_year_results=1)) == 2

    @pytest.mark.asyncio
    async def test_constituency_does_not_expand(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        constituency = await _constituency_id(async_session, "Aurangabad", 19)
        assert await _count(async_session, ResultFilters(constituency=constituency, min_year_results=1)) == 1

    @pytest.mark.asyncio
    async def test_unresolved_district_is_ignored(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        unfiltered = await _count(async_session, ResultFilters(min_year_results=1))
        assert await _count(async_session, ResultFilters(district=99_999, min_year_results=1)) == unfiltered

    @pytest.mark.asyncio
    async def test_district_and_constituency_are_conjunctive(
        self, async_session: AsyncSession, seeded: ResultSeeder
    ) -> None:
        district = await _constituency_id(async_session, "Aurangabad", 19)
        inside = await _constituency_id(async_session, "Aurangabad", 37)
        outside = await _constituency_id(async_session, "Gaya", 38)
        both_inside = ResultFilters(district=district, constituency=inside, min_year_results=1)
        inconsistent = ResultFilters(district=district, constituency=outside, min_year_results=1)
        assert await _count(async_session, both_inside) == 1
        assert await _count(async_session, inconsistent) == 0


class TestPredicateComposition:
    """Tests for combining filter dimensions."""

    @pytest.mark.asyncio
    async def test_year_and_state(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        bihar = (await seeded.state("Bihar")).id
        assert await _count(async_session, ResultFilters(year=2019, state=bihar, min_year_results=1)) == 2

    @pytest.mark.asyncio
    async def test_party(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        rjd = (await seeded.party("RJD")).id
        assert await _count(async_session, ResultFilters(party=rjd, min_year_results=1)) == 2

    @pytest.mark.asyncio
    async def test_gender(self, async_session: AsyncSession, seeded: ResultSeeder) -> None:
        assert await _count(async_session, ResultFilters(gender=Gender.FEMALE, min_year_results=1)) == 1
