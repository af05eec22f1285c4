"""
Diario de Classe API — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes store selection, middleware registration, route mounting,
       error rendering and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn diario_api.main:app`) and by tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:      /posts (CRUD + search)   /health      │
    │               /docs /redoc /openapi.json            │
    │                                                     │
    │  Exception Handlers (envelope {status, message}):   │
    │    InvalidInput→400/422  NotFound→404  other→500    │
    │                                                     │
    │  app.state.post_service → PostService(repository)   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging; for MongoDB, ping the server and ensure the
              unique index on `id` (startup fails if the server is unreachable)
    Shutdown: close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from diario_api import __version__
from diario_api.config import Settings, settings as default_settings
from diario_api.database import (
    close_client,
    create_mongo_client,
    get_posts_collection,
    ping_database,
)
from diario_api.exceptions import DatabaseError, DiarioError
from diario_api.middleware.logging import RequestLoggingMiddleware
from diario_api.middleware.request_id import RequestIDMiddleware, request_id_var
from diario_api.repositories import MongoPostRepository, PostRepository, build_repository
from diario_api.routes import health, posts
from diario_api.services.post_service import PostService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2026-01-01T12:00:00 [INFO] diario_api.access: GET /posts 200 1.2ms ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Diario de Classe API starting (store=%s)", app_settings.store_backend)

    client = app.state.mongo_client
    if client is not None:
        try:
            await ping_database(client)
        except Exception as e:
            logger.error("Could not connect to MongoDB: %s", str(e))
            raise
        repository = app.state.post_service.repository
        if isinstance(repository, MongoPostRepository):
            await repository.ensure_indexes()
        logger.info("MongoDB connected")

    logger.info(
        "Server ready at http://%s:%d (docs at /docs)",
        app_settings.backend_host,
        app_settings.backend_port,
    )

    yield

    logger.info("Diario de Classe API shutting down...")
    if client is not None:
        await close_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every failure as `{"status": "error", "message": ...}`.

    Handler map:
        DiarioError (InvalidInput, NotFound)  → exc.status_code, exc.message
        DatabaseError                         → 500, generic message, context logged
        RequestValidationError (bad body)     → 422
        Starlette HTTPException (404/405)     → its status code
        Exception (fallback)                  → 500 "Internal server error"

    Security: internal details (driver errors, stack traces) are logged
    server-side only, never returned.
    """

    @app.exception_handler(DiarioError)
    async def handle_app_error(request: Request, exc: DiarioError):
        rid = request_id_var.get("")
        if isinstance(exc, DatabaseError) or exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request."
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location or 'body'} - {first.get('msg', 'invalid value')}"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return _error(422, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    repository: Optional[PostRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: overrides the module-level settings (tests)
        repository: injects a ready store instead of building one from settings

    Returns:
        Configured FastAPI instance. Its PostService lives on app.state.
    """
    app_settings = app_settings or default_settings

    mongo_client = None
    if repository is None:
        collection = None
        if app_settings.store_backend == "mongo":
            mongo_client = create_mongo_client(app_settings)
            collection = get_posts_collection(mongo_client, app_settings)
        repository = build_repository(app_settings, collection)

    app = FastAPI(
        title="Diario de Classe API",
        description=(
            "CRUD API for class diary posts (title, content, author, creation date) "
            "with case-insensitive search over title and content."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.mongo_client = mongo_client
    app.state.post_service = PostService(repository)

    # Last added executes first: Request ID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(posts.router)
    app.include_router(health.router)

    return app


# uvicorn expects `diario_api.main:app` to be importable
app = create_app()
