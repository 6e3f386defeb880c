"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, static file serving and startup/shutdown
events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.categories import router as categories_router
from app.api.health import router as health_router
from app.api.middleware import internal_error_response, setup_middleware
from app.api.products import router as products_router
from app.api.public_products import router as public_products_router
from app.domain.exceptions import DomainError, EntityNotFoundError
from app.infrastructure.config import settings
from app.infrastructure.database import create_tables
from app.infrastructure.logging_config import configure_logging
from app.infrastructure.storage import get_storage

logger = structlog.get_logger()

storage = get_storage()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    configure_logging(settings.log_level)
    logger.info(
        "Starting catalog API",
        version=settings.api_version,
        debug=settings.debug,
        languages=settings.supported_languages,
    )

    storage.ensure_folder()

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ready")

    yield

    # Shutdown
    logger.info("Shutting down catalog API")


app = FastAPI(
    title="EShop Catalog API",
    description="Product catalog management backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request context (correlation id, access log, 500 fallback)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(public_products_router)
app.include_router(categories_router)

# Uploaded files
app.mount(
    f"/{settings.user_content_folder}",
    StaticFiles(directory=storage.folder, check_dir=False),
    name="user-content",
)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Map domain errors to 404 (not found) or 400 responses."""
    request_id = getattr(request.state, "request_id", None)
    status_code = 404 if isinstance(exc, EntityNotFoundError) else 400

    logger.info(
        "Domain error",
        error_code=exc.error_code,
        message=exc.message,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": [
                {"field": key, "message": str(value)}
                for key, value in exc.details.items()
            ],
            "request_id": request_id,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    # Extract error details from exception
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception("Unhandled exception in handler", error=str(exc))

    return internal_error_response(request_id)
