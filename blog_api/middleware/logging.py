"""
Blog API — Request Logging Middleware
=======================================

What:  One access-log line per HTTP request with status and duration.
How:   Measures time around call_next and logs at a level chosen by the
       status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request bodies (author emails)
"""

import logging
import time
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger("blog_api.access")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration and request ID for each request.

    Paths in `skip_paths` are not logged; by default that is GET /health,
    which probes hit every few seconds. Must sit inside RequestIDMiddleware,
    which sets request.state.request_id.
    """

    def __init__(self, app: ASGIApp, skip_paths: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.skip_paths = frozenset(skip_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.skip_paths:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        rid = getattr(request.state, "request_id", "")
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
