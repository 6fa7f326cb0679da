"""
Blog API — Liveness and Health Routes
=======================================

What:  GET / (plain-text liveness) and GET /health (store connectivity).
Why:   Load balancers and container health checks need a cheap probe; the
       root message lets a human confirm the server is up from a browser.
How:   /health pings the store with its lightweight check and never raises:
       a failed ping is reported as "unhealthy" in the body.
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from blog_api import __version__
from blog_api.schemas.blog import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness message",
)
async def root() -> str:
    return "Blog API server is running 🚀"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the blog store is reachable.",
)
async def health_check(request: Request) -> HealthResponse:
    store_status = "connected"
    overall = "healthy"

    store = getattr(request.app.state, "blog_store", None)
    if store is None:
        store_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: no store configured")
    else:
        try:
            await store.ping()
        except Exception as e:
            store_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
