"""FastAPI main application with app factory and route configuration."""

import logging
import time
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .deps import get_settings
from .errors import ValidationError, error_body
from .models.task import utc_now
from .routes import tasks
from .schemas import HealthResponse
from .services.task_service import TaskService
from .utils.logging import (
    configure_request_logging,
    log_shutdown_info,
    log_startup_info,
    setup_logging,
)

logger = logging.getLogger(__name__)


def _describe_request_errors(exc: RequestValidationError) -> list:
    """Flatten FastAPI request errors into readable messages."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return messages


def create_app(
    settings: Optional[Settings] = None,
    task_service: Optional[TaskService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings, loaded from the environment if omitted
        task_service: Task service to serve, a fresh in-memory one if omitted

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager for startup and shutdown events."""
        app.state.started_at = time.monotonic()
        setup_logging(settings)
        log_startup_info(settings)

        yield

        log_shutdown_info(settings)

    app = FastAPI(
        title=settings.app_name,
        description="A minimal task tracking API backed by in-memory storage",
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.task_service = task_service if task_service is not None else TaskService()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(configure_request_logging())

    # Custom exception handlers
    @app.exception_handler(ValidationError)
    async def task_validation_exception_handler(request: Request, exc: ValidationError):
        """Handle task payload rule violations."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                status.HTTP_400_BAD_REQUEST,
                "Validation Error",
                exc.message,
                details=exc.errors,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle malformed or missing request bodies."""
        details = _describe_request_errors(exc)
        logger.warning(
            f"Validation error for {request.method} {request.url.path}: {details}"
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                status.HTTP_400_BAD_REQUEST,
                "Validation Error",
                "Invalid request body",
                details=details,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions, including unknown routes."""
        if exc.status_code >= 500:
            error = "Internal Server Error"
            message = "Something went wrong"
        elif exc.status_code == status.HTTP_404_NOT_FOUND:
            error = "Not Found"
            message = f"Not Found - {request.url.path}"
        else:
            error = HTTPStatus(exc.status_code).phrase
            message = str(exc.detail)

        logger.warning(
            f"HTTP {exc.status_code}: {message} for {request.method} {request.url.path}"
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, error, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(
            f"Unexpected error for {request.method} {request.url.path}: {str(exc)}",
            exc_info=exc,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal Server Error",
                "Something went wrong",
            ),
        )

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint for monitoring and load balancers."""
        # Zero until the lifespan startup has run
        started_at = getattr(request.app.state, "started_at", None)
        uptime = time.monotonic() - started_at if started_at is not None else 0.0

        return HealthResponse(
            status="healthy",
            timestamp=utc_now(),
            uptime=round(uptime, 3),
        )

    # Root endpoint
    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "A minimal task tracking API backed by in-memory storage",
            "docs_url": "/docs",
            "health_check": "/health",
            "endpoints": {
                "tasks": "/tasks",
                "task": "/tasks/{id}",
                "stats": "/tasks/stats",
            },
        }

    app.include_router(tasks.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the app instance
app = create_app()
