"""ASGI entry point: ``create_app`` builds the results API.

The lifespan opens the results store and configures logging; exception
handlers turn engine errors into 400 and store failures into 503 bodies
shaped like ``ErrorResponse``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import InterfaceError, OperationalError

from lok_sabha_api import __version__
from lok_sabha_api.core.config import get_settings
from lok_sabha_api.core.database import dispose_engine, init_engine
from lok_sabha_api.core.errors import StoreUnavailableError
from lok_sabha_api.core.logging import setup_logging
from lok_sabha_api.schemas.common import ErrorResponse, HealthResponse

STORE_UNAVAILABLE = ErrorResponse(
    detail="Database not available. Check that the results store exists and is readable.",
    code="STORE_UNAVAILABLE",
)

# Exceptions meaning the store itself failed, as opposed to a bad request
_STORE_ERRORS: tuple[type[Exception], ...] = (StoreUnavailableError, OperationalError, InterfaceError)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Open the results store for the lifetime of the server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir, json_logs=settings.log_json)
    init_engine(settings.database_url, echo=False)
    logger.info("Results store configured at {}", settings.database_url)

    yield

    await dispose_engine()
    logger.info("Results store closed")


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _bad_request(request: Request, exc: Exception) -> JSONResponse:
    logger.debug(f"Rejected {request.method} {request.url.path}: {exc}")
    return _error(400, ErrorResponse(detail=str(exc)))


async def _store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Results store unavailable during {request.method} {request.url.path}")
    return _error(503, STORE_UNAVAILABLE)


def create_app() -> FastAPI:
    """Build the results API: handlers, health probe, middleware and data routes."""
    settings = get_settings()

    app = FastAPI(
        title="Lok Sabha Results API",
        description="Read-only analytics over Indian Lok Sabha election results, 1991-2019",
        version=__version__,
        lifespan=lifespan,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid filter combination"},
            503: {"model": ErrorResponse, "description": "Results store unavailable"},
        },
    )

    app.add_exception_handler(ValueError, _bad_request)
    for error_type in _STORE_ERRORS:
        app.add_exception_handler(error_type, _store_unavailable)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", message="Server is running")

    from lok_sabha_api.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
