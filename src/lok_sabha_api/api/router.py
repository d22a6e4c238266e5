"""Root API router and middleware registration."""

from fastapi import APIRouter, FastAPI

from lok_sabha_api.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, setup_cors
from lok_sabha_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with the reference, metric and analytics routers.

    Args:
        settings: Application settings.

    Returns:
        Router mounted under ``settings.api_prefix``.
    """
    from lok_sabha_api.api.v1.analytics import analytics_router
    from lok_sabha_api.api.v1.metrics import metrics_router
    from lok_sabha_api.api.v1.reference import reference_router

    root_router = APIRouter(prefix=settings.api_prefix)
    root_router.include_router(reference_router)
    root_router.include_router(metrics_router)
    root_router.include_router(analytics_router)
    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register CORS, hardening headers and rate limiting on the app."""
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.rate_limit_per_minute,
        proxy_headers=settings.trusted_proxy_header_list,
    )
