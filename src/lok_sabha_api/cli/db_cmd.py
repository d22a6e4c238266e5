"""``db`` commands: Alembic migrations, plus a direct table create for local SQLite files."""

import asyncio
from pathlib import Path

import typer
from loguru import logger

db_app = typer.Typer(no_args_is_help=True)

ALEMBIC_INI = Path("alembic.ini")

_config_option = typer.Option(ALEMBIC_INI, "--config", "-c", help="Path to alembic.ini")


def _alembic_config(ini_path: Path):  # noqa: ANN202
    from alembic.config import Config

    config = Config(str(ini_path))
    # Logging is already set up by the CLI callback; keep env.py from replacing it
    config.attributes["configure_logger"] = False
    return config


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    ini_path: Path = _config_option,
) -> None:
    """Migrate the results store up to a revision."""
    from alembic import command

    logger.info(f"Upgrading results store to {revision}")
    command.upgrade(_alembic_config(ini_path), revision)


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
    ini_path: Path = _config_option,
) -> None:
    """Roll the results store back to a revision."""
    from alembic import command

    logger.info(f"Downgrading results store to {revision}")
    command.downgrade(_alembic_config(ini_path), revision)


@db_app.command()
def current(ini_path: Path = _config_option) -> None:
    """Print the revision the results store is at."""
    from alembic import command

    command.current(_alembic_config(ini_path), verbose=True)


async def _create_tables() -> list[str]:
    from lok_sabha_api.core.config import get_settings
    from lok_sabha_api.core.database import dispose_engine, init_engine
    from lok_sabha_api.models import Base

    engine = init_engine(get_settings().database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await dispose_engine()
    return sorted(Base.metadata.tables)


@db_app.command()
def create() -> None:
    """Create missing tables straight from the ORM models, bypassing migrations."""
    tables = asyncio.run(_create_tables())
    logger.info(f"Results store has tables: {', '.join(tables)}")
