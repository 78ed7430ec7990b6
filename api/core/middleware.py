"""
HTTP middleware: security response headers, per-client rate limiting and the
generic 500 for unexpected errors.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if "x-powered-by" in response.headers:
            del response.headers["x-powered-by"]
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window limiter keyed by client address.

    State is in-process; each worker process counts on its own.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        max_requests: int,
        window_s: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(app)
        self.max_requests = max_requests
        self.window_s = window_s
        self._clock = clock
        # client -> (window_start, count)
        self._hits: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_s:
            return None
        self._hits = {k: v for k, v in self._hits.items() if now - v[0] < self.window_s}
        self._last_sweep = now

    def _hit(self, client: str) -> tuple[bool, float]:
        """
        Count one request; return (allowed, seconds until the window resets).
        """
        now = self._clock()
        self._sweep(now)

        start, count = self._hits.get(client, (now, 0))
        if now - start >= self.window_s:
            start, count = now, 0
        count += 1
        self._hits[client] = (start, count)
        return count <= self.max_requests, self.window_s - (now - start)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client = request.client.host if request.client else "unknown"
        allowed, reset_in = self._hit(client)
        if not allowed:
            logger.warning("rate_limited client=%s", client)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests."},
                headers={"Retry-After": str(max(1, math.ceil(reset_in)))},
            )
        return await call_next(request)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turn unexpected exceptions into a generic 500.

    Registered innermost so the response still passes through the CORS and
    security-header middleware.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unhandled_error path=%s", request.url.path)
            return JSONResponse(status_code=500, content={"error": "Something went wrong!"})
