"""
Correlation ID propagation.

One ID per HTTP request, carried in a ContextVar so every log record and the
opaque 500 body can name it. Callers may supply their own ID in the
X-Correlation-ID header.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

CORRELATION_HEADER = "X-Correlation-ID"

# Longer or non-printable header values are replaced with a fresh ID
MAX_CORRELATION_ID_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def normalize_correlation_id(candidate: str | None) -> str:
    """
    Accept a caller-supplied ID if it is usable, else generate one.

    Args:
        candidate: Raw header value, possibly None

    Returns:
        str: ID to use for the request
    """
    if candidate:
        candidate = candidate.strip()
        if 0 < len(candidate) <= MAX_CORRELATION_ID_LENGTH and candidate.isprintable():
            return candidate
    return new_correlation_id()


def get_correlation_id() -> str:
    """Current correlation ID, empty outside a request."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of the block.

    The previous value is restored on exit, so nested scopes are safe.

    Args:
        correlation_id: Caller-supplied ID, normalized before use

    Yields:
        str: The bound correlation ID
    """
    value = normalize_correlation_id(correlation_id)
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
