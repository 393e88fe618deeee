"""
HTTP middleware for the application.

``install_middleware`` registers, from outermost to innermost: CORS,
request logging, security headers, per‑client rate limiting and gzip
compression.  CORS and compression come from Starlette; the rest are
small ``@app.middleware("http")`` functions defined here.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from ..schemas.review import ErrorResponse
from .config import Settings

logger = logging.getLogger("reviews_api.access")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


class RateLimiter:
    """Fixed‑window request counter keyed by client address.

    Each key may make ``limit`` requests per ``window`` seconds.  The
    window starts with the first request of a key and resets once it
    has elapsed.  Expired keys are swept at most once per window, and
    only while more than ``max_keys`` are tracked.  Thread safe.
    """

    def __init__(
        self,
        limit: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
        max_keys: int = 10000,
    ) -> None:
        self.limit = limit
        self.window = window
        self.max_keys = max_keys
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: Dict[str, Tuple[float, int]] = {}
        self._next_prune = clock() + window

    def allow(self, key: str) -> bool:
        """Record a request for ``key`` and report whether it is within the limit."""
        now = self._clock()
        with self._lock:
            started, count = self._hits.get(key, (now, 0))
            if now - started >= self.window:
                started, count = now, 0
            count += 1
            self._hits[key] = (started, count)
            if len(self._hits) > self.max_keys and now >= self._next_prune:
                self._prune(now)
            return count <= self.limit

    def _prune(self, now: float) -> None:
        expired = [k for k, (started, _) in self._hits.items() if now - started >= self.window]
        for k in expired:
            del self._hits[k]
        self._next_prune = now + self.window


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def install_middleware(app: FastAPI, settings: Settings, limiter: Optional[RateLimiter] = None) -> None:
    """Attach the middleware stack to ``app``.

    Starlette wraps middleware in reverse registration order: gzip is
    added first to sit innermost and CORS last to sit outermost, so
    responses produced by the other layers (such as a 429) still carry
    CORS headers.
    """
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    if limiter is None and settings.rate_limit > 0:
        limiter = RateLimiter(settings.rate_limit, settings.rate_limit_window)
    app.state.rate_limiter = limiter

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if limiter is not None and not limiter.allow(_client_ip(request)):
            logger.warning("Rate limit exceeded for %s", _client_ip(request))
            body = ErrorResponse(error="rate_limit_exceeded", message="Too many requests, please try again later")
            return JSONResponse(status_code=429, content=body.model_dump())
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "%s %s - %d (%dms) ip=%s user_agent=%r size=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            _client_ip(request),
            request.headers.get("user-agent", ""),
            response.headers.get("content-length", "-"),
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "HEAD", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "X-Requested-With"],
        allow_credentials=True,
        max_age=86400,
    )
