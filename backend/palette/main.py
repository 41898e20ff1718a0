"""
Palette Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       run() (the `palette-backend` script) serves the module-level `app`
       with uvicorn on BACKEND_HOST and BACKEND_PORT (or PORT).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: Request ID → Logging → GZip → CORS     │
    │                                                     │
    │  Routes:                                            │
    │    GET /  /colors  /colorid  /color  /colorname     │
    │    POST /addcolor          GET /health              │
    │                                                     │
    │  Exception Handlers:                                │
    │    Validation→400  NotFound→404  Conflict→409       │
    │    MalformedHex→500  Database→500  other→500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, settings validation, database ping (retried)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from palette import __version__
from palette.config import settings
from palette.database import dispose_engine, wait_for_database
from palette.exceptions import (
    ConflictError,
    DatabaseError,
    MalformedHexError,
    NotFoundError,
    PaletteError,
    ValidationError,
)
from palette.middleware.logging import RequestLoggingMiddleware
from palette.middleware.request_id import RequestIDMiddleware, request_id_var
from palette.routes import colors, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout
    (container runtimes collect stdout).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Palette Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    # Keep serving even if the database is down; /health reports it
    await wait_for_database()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Palette Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler table:
        ValidationError   → 400 validation_error
        NotFoundError     → 404 not_found
        ConflictError     → 409 conflict
        MalformedHexError → 500 malformed_color_data (stored data is corrupt)
        DatabaseError     → 500 server_error (details logged only)
        PaletteError      → 500 server_error
        Exception         → 500 internal_server_error (stack trace logged)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(409, "conflict", exc.message, exc.context)

    @app.exception_handler(MalformedHexError)
    async def handle_malformed_hex(request: Request, exc: MalformedHexError):
        logger.error("[%s] Malformed stored color: %s", request_id_var.get(""), exc.message)
        return _error_response(500, "malformed_color_data", exc.message, exc.context)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(
            500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(PaletteError)
    async def handle_palette_error(request: Request, exc: PaletteError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Build a fully configured FastAPI instance (fresh per call, for tests)."""
    app = FastAPI(
        title="Palette API",
        description=(
            "Stores named hex colors and serves them raw or expanded into RGB "
            "channels, chroma, hue, saturation, value and luma."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware runs in reverse order of addition: the last added is outermost
    allow_any = settings.cors_origins_list == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=not allow_any,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(colors.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn; PORT is honored when BACKEND_PORT is unset."""
    uvicorn.run(
        "palette.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
