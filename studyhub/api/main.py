"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, exception handlers that
never leak internals in production, and the rate-limit sweeper.

Dependencies: fastapi, studyhub.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studyhub.api.deps.dependencies import get_service_cache
from studyhub.boundary.db.create_tables import create_all_tables
from studyhub.configs import get_settings
from studyhub.core.exceptions import (
    ExternalServiceError,
    SessionExpiredError,
    StudyHubException,
    ValidationError,
    create_safe_error,
)
from studyhub.observability import configure_logging
from studyhub.observability.log_utils import log_exception_with_context
from studyhub.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from studyhub.models.common import ErrorResponse

from .routers import (
    ai_router,
    chat_sessions_router,
    health_router,
    security_router,
)

logger = logging.getLogger(__name__)

_STATUS_BY_EXCEPTION: list[tuple[type[StudyHubException], int, str]] = [
    (ValidationError, 422, "VALIDATION_ERROR"),
    (ExternalServiceError, 502, "EXTERNAL_SERVICE_ERROR"),
    (SessionExpiredError, 401, "SESSION_EXPIRED"),
]


async def _sweep_rate_limits(interval_s: float) -> None:
    """Periodically drop expired rate-limit entries."""
    while True:
        await asyncio.sleep(interval_s)
        get_service_cache().rate_limiter.sweep_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    # Startup
    if settings.database.create_tables_on_startup:
        await create_all_tables()

    sweeper = asyncio.create_task(
        _sweep_rate_limits(settings.security.rate_limit_sweep_interval_s)
    )
    logger.info("Rate-limit sweeper started")

    yield

    # Shutdown
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    get_service_cache().clear()
    logger.info("Service cache cleared")


def _error_response(request: Request, status_code: int, message: str, code: str) -> JSONResponse:
    safe_error = create_safe_error(message, code, get_settings().is_development)
    notifier = getattr(request.state, "notifier", None)
    body = ErrorResponse(
        error=safe_error["message"],
        code=safe_error["code"],
        notifications=notifier.drain() if notifier is not None else [],
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def studyhub_exception_handler(request: Request, exc: StudyHubException) -> JSONResponse:
    """Map domain exceptions to status codes with a safe message."""
    for exc_type, status_code, code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            logger.warning(f"{__name__}:studyhub_exception_handler - {code}: {exc}")
            return _error_response(request, status_code, exc.message, code)

    logger.error(f"{__name__}:studyhub_exception_handler - Unmapped {type(exc).__name__}: {exc}")
    return _error_response(request, 500, exc.message, "GENERIC_ERROR")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and return the generic notice."""
    log_exception_with_context(
        logger,
        f"{__name__}:unhandled_exception_handler - {type(exc).__name__}",
        exc,
        method=request.method,
        path=request.url.path,
    )
    return _error_response(request, 500, str(exc), "INTERNAL_ERROR")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="StudyHub API",
        description="Study content generation and chat with input security and audit logging",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(StudyHubException, studyhub_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(ai_router, prefix="/api/v1")
    app.include_router(chat_sessions_router, prefix="/api/v1")
    app.include_router(security_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "studyhub.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
