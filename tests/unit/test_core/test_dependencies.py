"""Tests for request-scoped dependencies: sessions and result filters."""

from pathlib import Path

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from lok_sabha_api.core.config import Settings, get_settings
from lok_sabha_api.core.database import dispose_engine, init_engine
from lok_sabha_api.core.dependencies import get_async_session, required_year_filters, result_filters
from lok_sabha_api.services.filters import ResultFilters


@pytest.fixture
def app() -> FastAPI:
    """Minimal app echoing the parsed filters."""
    test_app = FastAPI()

    @test_app.get("/optional")
    async def optional(filters: ResultFilters = Depends(result_filters)) -> dict:  # noqa: B008
        return filters.__dict__

    @test_app.get("/required")
    async def required(filters: ResultFilters = Depends(required_year_filters)) -> dict:  # noqa: B008
        return filters.__dict__

    settings = Settings(_env_file=None, valid_year_min_results=7)  # type: ignore[call-arg]
    test_app.dependency_overrides[get_settings] = lambda: settings
    return test_app


@pytest.fixture
def client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestResultFilters:
    """Tests for query-string to ResultFilters mapping."""

    @pytest.mark.asyncio
    async def test_all_dimensions_optional(self, client: AsyncClient) -> None:
        resp = await client.get("/optional")
        assert resp.status_code == 200
        data = resp.json()
        assert data["year"] is None
        assert data["district"] is None
        assert data["min_year_results"] == 7

    @pytest.mark.asyncio
    async def test_parses_every_dimension(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/optional", params={"year": 2019, "state": 3, "party": 4, "gender": "F", "district": 5, "constituency": 6}
        )
        assert resp.json() == {
            "year": 2019,
            "state": 3,
            "party": 4,
            "gender": "F",
            "district": 5,
            "constituency": 6,
            "min_year_results": 7,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("year", [1949, 2101])
    async def test_year_out_of_range_rejected(self, client: AsyncClient, year: int) -> None:
        resp = await client.get("/optional", params={"year": year})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_gender_rejected(self, client: AsyncClient) -> None:
        resp = await client.get("/optional", params={"gender": "X"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_required_year_missing(self, client: AsyncClient) -> None:
        resp = await client.get("/required")
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_required_year_present(self, client: AsyncClient) -> None:
        resp = await client.get("/required", params={"year": 2014})
        assert resp.status_code == 200
        assert resp.json()["year"] == 2014


class TestGetAsyncSession:
    """Tests for the session dependency."""

    @pytest.mark.asyncio
    async def test_yields_session_from_factory(self, tmp_path: Path) -> None:
        init_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
        try:
            gen = get_async_session()
            session = await gen.__anext__()
            assert session is not None
            await gen.aclose()
        finally:
            await dispose_engine()
