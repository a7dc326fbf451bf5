"""
FastAPI middleware for observability.

CorrelationMiddleware must wrap RequestLoggingMiddleware so access log lines
carry the request's correlation ID.

Dependencies: starlette, ragchat.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ragchat.observability.correlation import CORRELATION_HEADER, correlation_scope
from ragchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log: method, path, status and latency for every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {request.url.path} - Unhandled {type(e).__name__}",
                extra={"elapsed_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
            raise

        log_with_context(
            logger,
            logging.INFO,
            f"{request.method} {request.url.path} - {response.status_code}",
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Bind a correlation ID for the request and echo it in the response.

    Uses the caller's X-Correlation-ID when it is usable, else a new UUID.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
