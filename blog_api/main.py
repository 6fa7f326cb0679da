"""
Blog API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; uvicorn serves the
       module-level `app` (uvicorn blog_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌─────────┐  │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS   │  │
    │  └──────────┘ └─────────────┘ └──────┘ └─────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────┐ ┌─────────────────┐  │
    │  │ /blogs, /blogs/{id}       │ │ /, /health      │  │
    │  └───────────────────────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌────────────────────────────────────────────────┐ │
    │  │ Validation→400 │ NotFound→404 │ Store→500      │ │
    │  └────────────────────────────────────────────────┘ │
    └─────────────────────────────────────────────────────┘

Store lifecycle:
    A store passed to create_app() is used as-is and left open (the caller
    owns it). Otherwise the lifespan builds one from settings on startup and
    closes it on shutdown.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from blog_api import __version__
from blog_api.config import settings
from blog_api.exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import RequestIDMiddleware, request_id_var
from blog_api.routes import blogs, health
from blog_api.stores import BlogStore, build_store

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Per-operation chatter from the server and drivers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Build the store from settings, unless one was injected
    Shutdown:
        1. Close the store if the lifespan built it
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Blog API starting up...")

    owns_store = False
    if getattr(app.state, "blog_store", None) is None:
        try:
            settings.validate_required_for_production()
        except ValueError as e:
            # Keep serving: / and /health still answer, blog routes return 500
            logger.error("Configuration error: %s", str(e))
            logger.error("Fix the configuration and restart the server.")
        else:
            app.state.blog_store = build_store(settings)
            owns_store = True
            logger.info("Store backend: %s", settings.store_backend)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Blog API shutting down...")
    if owns_store:
        await app.state.blog_store.close()
        app.state.blog_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        InvalidIdentifierError  → 400 invalid_identifier
        ValidationError         → 400 validation_error
        RequestValidationError  → 400 validation_error (malformed body)
        NotFoundError           → 404 not_found
        StoreError              → 500 server_error (generic message)
        Exception (fallback)    → 500 internal_server_error

    Server errors never expose driver messages; details are logged only.
    """

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid blog ID: %s", rid, exc.blog_id)
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_identifier",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body is not JSON or a field has the wrong type."""
        rid = request_id_var.get("")
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning("[%s] Malformed request: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request body is invalid",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[BlogStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: BlogStore to serve. When None, the lifespan builds one from
               settings at startup.
    """
    app = FastAPI(
        title="Blog API",
        description="Create, read, update and delete blog posts.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.blog_store = store

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(blogs.router)
    app.include_router(health.router)

    return app


app = create_app()
