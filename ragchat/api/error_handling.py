"""
API error handling.

Maps the application error taxonomy onto HTTP responses in one place:
- ValidationError / malformed bodies -> 400
- QuotaOrRateLimitError -> 429 with actionable detail
- ServiceInitializingError -> 503 with Retry-After
- anything else from the services -> 500, opaque, with a request id
- uncaught exceptions of any type -> the same opaque 500

Dependencies: fastapi, ragchat.core.exceptions, ragchat.models.common
System role: Exception to response translation
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ragchat.core.exceptions import (
    QuotaOrRateLimitError,
    RagChatException,
    ServiceInitializingError,
    ValidationError,
)
from ragchat.models.common import ErrorResponse, InternalErrorResponse, QuotaErrorResponse
from ragchat.observability.correlation import (
    CORRELATION_HEADER,
    get_correlation_id,
    normalize_correlation_id,
)

logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"
INTERNAL_ERROR = "An internal error occurred while processing your request."

QUOTA_ERROR = "Model provider quota or rate limit exceeded."
QUOTA_DETAIL = (
    "Your model provider plan may be out of quota or requests are being rate-limited. "
    "Check your billing and usage, consider using a smaller model, or retry later."
)
PROVIDER_ERROR_DOCS = "https://ai.google.dev/gemini-api/docs/troubleshooting"
RATE_LIMIT_TROUBLESHOOTING = "https://python.langchain.com/docs/troubleshooting/errors/MODEL_RATE_LIMIT/"

RETRY_AFTER_SECONDS = 5


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies with the same shape as service validation errors."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.warning(
        f"{__name__}:handle_request_validation_error - Invalid request body",
        extra={"path": request.url.path, "error_count": len(errors)},
    )
    body = ErrorResponse(error=INVALID_BODY, details={"errors": errors})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(
        f"{__name__}:handle_validation_error - Validation failed",
        extra={"path": request.url.path, "error": exc.message},
    )
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def handle_service_initializing(request: Request, exc: ServiceInitializingError) -> JSONResponse:
    logger.warning(
        f"{__name__}:handle_service_initializing - Pipeline not ready",
        extra={"path": request.url.path, "state": exc.details.get("state")},
    )
    body = ErrorResponse(error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


async def handle_quota_error(request: Request, exc: QuotaOrRateLimitError) -> JSONResponse:
    logger.warning(
        f"{__name__}:handle_quota_error - Provider quota or rate limit hit",
        extra={"path": request.url.path, "status_code": exc.status_code},
    )
    body = QuotaErrorResponse(
        error=QUOTA_ERROR,
        detail=QUOTA_DETAIL,
        docs=PROVIDER_ERROR_DOCS,
        troubleshooting=RATE_LIMIT_TROUBLESHOOTING,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=body.model_dump(mode="json"),
    )


async def handle_internal_error(request: Request, exc: RagChatException) -> JSONResponse:
    """Opaque 500. The cause was already logged where it was caught."""
    request_id = get_correlation_id() or None
    logger.error(
        f"{__name__}:handle_internal_error - Internal error: {type(exc).__name__}",
        extra={"path": request.url.path, "request_id": request_id, "details": exc.details},
    )
    body = InternalErrorResponse(error=INTERNAL_ERROR, request_id=request_id)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Opaque 500 for exceptions outside the taxonomy.

    Runs outside the correlation middleware, so the request id falls back
    to the caller's header (or a fresh ID) and is echoed here directly.
    """
    request_id = get_correlation_id() or normalize_correlation_id(
        request.headers.get(CORRELATION_HEADER)
    )
    logger.error(
        f"{__name__}:handle_unexpected_error - Unhandled {type(exc).__name__}: {exc}",
        extra={"path": request.url.path, "request_id": request_id},
    )
    body = InternalErrorResponse(error=INTERNAL_ERROR, request_id=request_id)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
        headers={CORRELATION_HEADER: request_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register taxonomy handlers on the application.

    Handlers resolve by exception MRO, so RagChatException catches every
    taxonomy member without a more specific handler. The Exception handler
    is served by the outermost error middleware and covers everything else.
    """
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ServiceInitializingError, handle_service_initializing)
    app.add_exception_handler(QuotaOrRateLimitError, handle_quota_error)
    app.add_exception_handler(RagChatException, handle_internal_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
