"""Response hardening, CORS and per-client throttling for the public API."""

import time
from collections import defaultdict, deque

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from lok_sabha_api.core.config import Settings

RATE_WINDOW_SECONDS = 60.0

_HARDENING_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def client_address(request: Request, proxy_headers: list[str]) -> str:
    """Identify the caller for throttling.

    The first non-empty header in ``proxy_headers`` wins; a forwarded-for
    chain contributes its leftmost hop. Without any, the socket peer is used.
    """
    for header in proxy_headers:
        value = request.headers.get(header, "").strip()
        if value:
            return value.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow cross-origin reads.

    With no origins configured every origin may read, without credentials.
    """
    origins = settings.cors_origin_list
    regex = settings.cors_origin_regex.strip() or None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ([] if regex else ["*"]),
        allow_origin_regex=regex,
        allow_credentials=bool(origins or regex),
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp hardening headers on every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in _HARDENING_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute window of requests per client address, kept in memory."""

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 200,
        proxy_headers: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.proxy_headers = proxy_headers or []
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        address = client_address(request, self.proxy_headers)
        now = time.monotonic()
        hits = self._hits[address]
        while hits and hits[0] <= now - RATE_WINDOW_SECONDS:
            hits.popleft()

        if len(hits) >= self.requests_per_minute:
            return Response(
                content='{"error":"Too many requests"}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(int(RATE_WINDOW_SECONDS))},
            )

        hits.append(now)
        return await call_next(request)
