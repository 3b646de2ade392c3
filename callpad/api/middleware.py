"""
API Middleware.

Request ID injection with response timing, and a per-IP sliding-window
rate limiter sized from settings.
"""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from callpad.config import get_settings
from callpad.logging_config import generate_trace_id, get_logger, trace_id_var

logger = get_logger(__name__)

# In-memory, per-process request timestamps keyed by client IP
_rate_counts: dict[str, list[float]] = defaultdict(list)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request and response with an ID and log its timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID", generate_trace_id())
        token = trace_id_var.set(request_id)
        start = time.monotonic()

        try:
            response = await call_next(request)
        finally:
            trace_id_var.reset(token)

        elapsed_ms = round((time.monotonic() - start) * 1000, 1)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = str(elapsed_ms)

        logger.info(
            "api_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            elapsed_ms=elapsed_ms,
            request_id=request_id,
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window request limit per client IP."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        window = settings.rate_limit_window_seconds
        client_ip = request.client.host if request.client else "unknown"
        now = time.time()

        _rate_counts[client_ip] = [t for t in _rate_counts[client_ip] if now - t < window]

        if len(_rate_counts[client_ip]) >= settings.rate_limit_max_requests:
            logger.warning("rate_limit_exceeded", client_ip=client_ip)
            return Response(
                content='{"error": "Rate limit exceeded"}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(window)},
            )

        _rate_counts[client_ip].append(now)
        return await call_next(request)


def reset_rate_limits() -> None:
    _rate_counts.clear()
