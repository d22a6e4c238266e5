"""``import`` commands: offline loading of TCPD result files into the store."""

import asyncio
from pathlib import Path

import typer

from lok_sabha_api.services.import_service import ImportSummary

import_app = typer.Typer(no_args_is_help=True)


def _print_summary(file_path: Path, summary: ImportSummary) -> None:
    typer.echo(f"\nImported {file_path.name}:")
    typer.echo(f"  Total records:  {summary.total_records}")
    typer.echo(f"  Inserted:       {summary.inserted}")
    typer.echo(f"  Skipped:        {summary.skipped}")


async def _load(file_path: Path, batch_size: int | None) -> ImportSummary:
    from lok_sabha_api.core.config import get_settings
    from lok_sabha_api.core.database import dispose_engine, get_session_factory, init_engine
    from lok_sabha_api.services import import_service

    settings = get_settings()
    init_engine(settings.database_url)
    try:
        async with get_session_factory()() as session:
            return await import_service.import_results(session, file_path, batch_size or settings.import_batch_size)
    finally:
        await dispose_engine()


@import_app.command("results")
def import_results_cmd(
    file: Path = typer.Argument(..., help="TCPD Lok Sabha results CSV", exists=True, dir_okay=False),  # noqa: B008
    batch_size: int | None = typer.Option(None, "--batch-size", min=1, help="Rows per chunk (default from settings)"),
) -> None:
    """Load a results CSV; parent rows are reused, result rows appended."""
    typer.echo(f"Importing {file}...")
    _print_summary(file, asyncio.run(_load(file, batch_size)))
