"""Results store handle.

One async engine and session factory per process, created by
``init_engine`` at startup (FastAPI lifespan or a CLI command) and released
by ``dispose_engine``. ``gather_in_sessions`` fans independent reads out
over sibling sessions.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lok_sabha_api.core.errors import StoreUnavailableError

T = TypeVar("T")

# Applied to server databases only; SQLite connections are file handles
SERVER_POOL_DEFAULTS = {"pool_size": 10, "max_overflow": 5}

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the process engine.

    Raises:
        StoreUnavailableError: If ``init_engine`` has not run.
    """
    if _engine is None:
        raise StoreUnavailableError("Results store is not open: init_engine() has not been called")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the process engine.

    Raises:
        StoreUnavailableError: If ``init_engine`` has not run.
    """
    if _session_factory is None:
        raise StoreUnavailableError("Results store is not open: no session factory")
    return _session_factory


def init_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Open the results store.

    Args:
        database_url: SQLAlchemy async URL, e.g. ``sqlite+aiosqlite:///./election_data.db``.
        **kwargs: Passed through to ``create_async_engine``.

    Returns:
        The new engine, also kept as the process engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    if not database_url.startswith("sqlite"):
        kwargs = {**SERVER_POOL_DEFAULTS, **kwargs}
    _engine = create_async_engine(database_url, **kwargs)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Close every pooled connection and forget the process engine."""
    global _engine, _session_factory  # noqa: PLW0603
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()


async def gather_in_sessions(
    session: AsyncSession,
    calls: Sequence[Callable[[AsyncSession], Awaitable[T]]],
) -> list[T]:
    """Run independent read-only calls concurrently and collect their results.

    A single AsyncSession cannot run statements concurrently, so each call
    gets a sibling session bound to the same engine as ``session``. Results
    come back in the order of ``calls``; the first failure propagates and
    fails the whole batch.

    Args:
        session: The request session whose bind the sibling sessions share.
        calls: Coroutine functions taking a session.

    Returns:
        The results of ``calls``, in order.
    """
    if not calls:
        return []
    factory = async_sessionmaker(session.bind, expire_on_commit=False)

    async def _run(call: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with factory() as sibling:
            return await call(sibling)

    return list(await asyncio.gather(*(_run(call) for call in calls)))
