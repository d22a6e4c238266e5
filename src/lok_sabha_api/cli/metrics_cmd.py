"""Print metric engine output as JSON, without starting the HTTP server."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any

import typer
from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

metrics_app = typer.Typer()


async def _run(query: Callable[[AsyncSession], Awaitable[Any]]) -> Any:
    from lok_sabha_api.core.config import get_settings
    from lok_sabha_api.core.database import dispose_engine, get_session_factory, init_engine

    settings = get_settings()
    init_engine(settings.database_url)
    try:
        async with get_session_factory()() as session:
            return await query(session)
    finally:
        await dispose_engine()


def _echo_json(value: Any) -> None:
    typer.echo(json.dumps(TypeAdapter(Any).dump_python(value, mode="json"), indent=2))


def _filters(year: int, state: int | None = None):  # noqa: ANN202
    from lok_sabha_api.core.config import get_settings
    from lok_sabha_api.services.filters import ResultFilters

    return ResultFilters(year=year, state=state, min_year_results=get_settings().valid_year_min_results)


@metrics_app.command()
def kpis(
    year: int = typer.Option(..., "--year", min=1950, max=2100, help="Election year"),
    state: int | None = typer.Option(None, "--state", help="State id"),
) -> None:
    """Seats, average turnout and share of women candidates for a year."""
    from lok_sabha_api.services.kpi_service import get_kpis

    _echo_json(asyncio.run(_run(lambda session: get_kpis(session, _filters(year, state)))))


@metrics_app.command("seat-share")
def seat_share(
    year: int = typer.Option(..., "--year", min=1950, max=2100, help="Election year"),
    state: int | None = typer.Option(None, "--state", help="State id"),
) -> None:
    """Seats won per party for a year, with winners by district."""
    from lok_sabha_api.services.seat_share_service import get_seat_share

    _echo_json(asyncio.run(_run(lambda session: get_seat_share(session, _filters(year, state)))))


@metrics_app.command("seat-changes")
def seat_changes(
    year1: int = typer.Option(..., "--year1", min=1950, max=2100, help="Baseline year"),
    year2: int = typer.Option(..., "--year2", min=1950, max=2100, help="Comparison year"),
) -> None:
    """Seat gains and losses per party between two years."""
    from lok_sabha_api.core.config import get_settings
    from lok_sabha_api.services.seat_change_service import get_seat_changes

    min_results = get_settings().valid_year_min_results
    _echo_json(
        asyncio.run(_run(lambda session: get_seat_changes(session, year1, year2, min_year_results=min_results)))
    )
