"""
Portfolio API Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn portfolio_api.main:app),
       or through `python -m portfolio_api`.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: CORS → Request ID → Logging → GZip     │
    │                                                     │
    │  Routes:                                            │
    │    /api/portfolio  /api/blog  /api/contact          │
    │    /api/settings   /api/health  /                   │
    │    /uploads/* (static)   /* (client, production)    │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError / bad request body → 400         │
    │    DatabaseError / FileStorageError   → 500         │
    │    anything else                      → 500         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → upload directory → MongoDB client + indexes
    Shutdown: close MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from portfolio_api import __version__
from portfolio_api.config import settings
from portfolio_api.database import Database
from portfolio_api.exceptions import (
    DatabaseError,
    FileStorageError,
    PortfolioError,
    ValidationError,
    error_response,
    format_validation_errors,
)
from portfolio_api.middleware.logging import RequestLoggingMiddleware
from portfolio_api.middleware.request_id import RequestIDMiddleware, request_id_var
from portfolio_api.routes import blog, contact, health, portfolio
from portfolio_api.routes import settings as settings_routes
from portfolio_api.routes.client import register_client_fallback
from portfolio_api.services.upload_service import upload_service

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "Accept"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-operation chatter from the server and the driver
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Ensure the upload directory exists
        3. Create the MongoDB client and indexes; store it on app.state

    Shutdown sequence:
        1. Close the MongoDB client
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Portfolio API starting up (environment=%s)", settings.environment)

    upload_dir = upload_service.ensure_directory()
    logger.info("Upload directory: %s", upload_dir)

    database = Database()
    await database.connect()
    app.state.database = database

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Portfolio API shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError         → 400 (bad input or failed write)
        RequestValidationError  → 400 (body/form/query did not parse)
        DatabaseError           → 500 (failed read)
        FileStorageError        → 500
        PortfolioError (base)   → 500
        Exception (fallback)    → 500 (normally turned into a response
                                       by RequestLoggingMiddleware first)

    Error messages are the raw underlying messages; the admin UI shows them as-is.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, exc.message, "validation_error", field=exc.field)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = format_validation_errors(exc.errors())
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), message)
        return error_response(400, message, "validation_error")

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(500, exc.message, "server_error")

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(500, exc.message, "server_error")

    @app.exception_handler(PortfolioError)
    async def handle_portfolio_error(request: Request, exc: PortfolioError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, exc.message, "server_error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return error_response(500, str(exc), "internal_server_error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Shannah Portfolio API",
        description=(
            "Content backend for a personal portfolio site: portfolio items, "
            "blog posts, contact messages, site settings and image uploads."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: CORS → RequestID → Logging → GZip
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(portfolio.router)
    app.include_router(blog.router)
    app.include_router(contact.router)
    app.include_router(settings_routes.router)

    # Uploaded images, served from the same prefix stored in documents.
    # The directory must exist before StaticFiles is constructed.
    app.mount(
        upload_service.url_prefix,
        StaticFiles(directory=str(upload_service.ensure_directory())),
        name="uploads",
    )

    # SPA fallback goes last so it never shadows an API route
    if settings.is_production:
        register_client_fallback(app, settings.client_build_dir)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
