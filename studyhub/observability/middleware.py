"""
FastAPI middleware for observability.

CorrelationMiddleware binds an X-Correlation-ID to the request context
and echoes it on the response. RequestLoggingMiddleware logs one line per
request with status, latency and the caller asserted by the gateway.

Dependencies: fastapi, starlette, studyhub.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from studyhub.observability.correlation import clear_correlation_id, set_correlation_id
from studyhub.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of each request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        context = {
            "method": request.method,
            "path": request.url.path,
            "user_id": request.headers.get("X-User-Id"),
        }

        try:
            response: Response = await call_next(request)
        except Exception as e:
            context["process_time_ms"] = round((time.perf_counter() - start) * 1000, 2)
            log_exception_with_context(
                logger, f"{request.method} {request.url.path} - Exception", e, **context
            )
            raise

        context["status_code"] = response.status_code
        context["process_time_ms"] = round((time.perf_counter() - start) * 1000, 2)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        log_with_context(
            logger, level, f"{request.method} {request.url.path} - {response.status_code}", **context
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID for the duration of the request."""

    async def dispatch(self, request: Request, call_next):
        """
        Reuse the caller's correlation ID or generate one.

        Returns:
            Response: Response carrying the X-Correlation-ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
