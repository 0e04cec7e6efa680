"""
Main FastAPI application factory.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .dependencies import get_app_config, get_logger
from .errors import DocumentRelayError
from .routes import bookings, health, reminders, uploads
from .models import ErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger = get_logger()
    logger.info("Starting FastAPI application", environment=settings.environment,
                api_version=settings.api_version)

    # Configuration is read once here and reused for every request
    config = get_app_config()
    if not config.booking_store.is_configured:
        logger.warning("WordPress API configuration missing; booking store calls will fail")
    if not config.reminders.cron_secret:
        logger.warning("CRON_SECRET not set; the reminder job endpoint will reject every call")

    yield

    logger.info("Shutting down FastAPI application")


def _error_response(status_code: int, message: str, error_code: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            success=False,
            message=message,
            error_code=error_code,
            details=details
        ).model_dump()
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(DocumentRelayError)
    async def relay_error_handler(request: Request, exc: DocumentRelayError):
        """Client, authorization and upstream errors with their own status codes."""
        if exc.status_code >= 500:
            get_logger().error("Request failed", path=request.url.path, error=exc.message,
                               cause=str(exc.__cause__) if exc.__cause__ else None)
        return _error_response(exc.status_code, exc.message, exc.error_code, exc.details)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors; details stay in the log."""
        get_logger().error("Unhandled exception", path=request.url.path, error=str(exc), exc_info=True)
        return _error_response(500, "Internal server error", "INTERNAL_ERROR")

    for module in (bookings, uploads, reminders, health):
        app.include_router(
            module.router,
            prefix=f"{settings.api_prefix}/v1"
        )

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Villa Claudia document API is running",
            "version": settings.app_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs"
        }

    return app
