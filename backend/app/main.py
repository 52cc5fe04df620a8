"""
Floreria Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the app-scoped collaborators (engine, session
       factory, image store), registers middleware, exception handlers and
       routes, and returns the app.
Who:   uvicorn (uvicorn app.main:app) and the test suite (create_app(settings)).

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                     FastAPI App                         │
    │                                                         │
    │  Middleware Chain:                                      │
    │  Req ID → Logging → Preflight → CORS → /api prefix      │
    │                                                         │
    │  Routes:                                                │
    │  /, /health   /ramos[/{id}]   /pedidos[/{id}]   /uploads│
    │                                                         │
    │  Exception Handlers → {ok: false, data: null, error}    │
    │  Validation→400  NotFound/Route→404  DB/File/other→500  │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the storage directory
    Shutdown: dispose the database engine
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
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings
from app.database import build_engine, build_session_factory, dispose_engine
from app.exceptions import (
    DatabaseError,
    FileStorageError,
    FloreriaError,
    NotFoundError,
    RouteNotFoundError,
    ValidationError,
)
from app.middleware.api_prefix import ApiPrefixMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.preflight import PreflightMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, pedidos, ramos, uploads
from app.schemas.envelope import Envelope
from app.services.image_service import ImageService

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "Accept", "X-Requested-With"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the whole process.

    Format: 2025-01-15T12:00:00 [INFO] app.services.ramo_service: Ramo created: id=7
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request lines come from floreria.access instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Floreria Backend %s starting up...", __version__)
    logger.info("Image storage: %s", app.state.image_service.storage_root)
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Floreria Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def envelope_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope.failure(message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to a {ok: false, data: null, error: <message>} envelope.

    Handler hierarchy:
        ValidationError                    → 400
        NotFoundError, RouteNotFoundError  → 404
        Starlette 404 / 405 (no route)     → 404 "Ruta no encontrada: <path>"
        DatabaseError, FileStorageError    → 500 (details logged only)
        FloreriaError (base)               → its status_code
        Exception (fallback)               → 500 "Error interno del servidor"
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return envelope_response(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return envelope_response(404, exc.message)

    @app.exception_handler(RouteNotFoundError)
    async def handle_route_not_found(request: Request, exc: RouteNotFoundError):
        return envelope_response(404, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # No route for this method + path
        if exc.status_code in (404, 405):
            return await handle_route_not_found(
                request, RouteNotFoundError(request.url.path, request.method)
            )
        return envelope_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), exc.errors())
        return envelope_response(400, "Datos inválidos")

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return envelope_response(500, exc.message)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error(
            "[%s] File storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return envelope_response(500, exc.message)

    @app.exception_handler(FloreriaError)
    async def handle_app_error(request: Request, exc: FloreriaError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return envelope_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return envelope_response(500, "Error interno del servidor")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Override the environment-loaded settings (tests).
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Floreria API",
        description="Catálogo de ramos y pedidos para la app móvil de la florería.",
        version=__version__,
        lifespan=lifespan,
        # /ramos/ is not /ramos: no 307 to the unprefixed path, it is a 404 envelope
        redirect_slashes=False,
    )

    # ── App-scoped collaborators ──────────────────────────────────────────
    # One pool and one image store per application, shared by all requests
    app.state.settings = app_settings
    app.state.engine = build_engine(app_settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.image_service = ImageService(
        storage_root=app_settings.storage_root,
        max_size=app_settings.max_image_size,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = outermost, so the execution order is the reverse of this list
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(ApiPrefixMiddleware, prefix=app_settings.api_prefix)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=["X-Request-ID"],
    )
    # Outside CORS: every OPTIONS is a 200, even for unlisted methods/headers
    app.add_middleware(
        PreflightMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.add_middleware(RequestLoggingMiddleware, api_prefix=app_settings.api_prefix)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(ramos.router)
    app.include_router(pedidos.router)
    app.include_router(uploads.router)

    return app


app = create_app()
