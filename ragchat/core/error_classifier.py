"""
Provider failure classification.

Decides whether an exception raised by the embedding or generation provider
signals quota exhaustion / rate limiting. LangChain integrations often wrap
the provider error, so the whole cause chain is inspected.

Dependencies: None (pure domain layer)
System role: Maps raw provider errors onto the error taxonomy
"""

RATE_LIMIT_STATUS = 429

QUOTA_MESSAGE_MARKERS: tuple[str, ...] = (
    "quota",
    "insufficientquotaerror",
    "rate limit",
    "rate_limit",
)

STATUS_ATTRIBUTES: tuple[str, ...] = ("status", "status_code", "statusCode", "code")

_MAX_CHAIN_DEPTH = 10


def _as_int(value: object) -> int | None:
    # HTTPStatus is an int subclass; bool is not a status
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return int(value)


def extract_status_code(error: BaseException) -> int | None:
    """
    Read a numeric status code from an exception, if it carries one.

    Checks the common attribute names used by HTTP and SDK clients, then
    `error.response.status_code`.

    Args:
        error: Exception to inspect

    Returns:
        int | None: Status code or None when absent
    """
    for attr in STATUS_ATTRIBUTES:
        status = _as_int(getattr(error, attr, None))
        if status is not None:
            return status

    response = getattr(error, "response", None)
    if response is not None:
        return _as_int(getattr(response, "status_code", None))
    return None


def _error_chain(error: BaseException):
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen and len(seen) < _MAX_CHAIN_DEPTH:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def is_quota_or_rate_limit_error(error: BaseException) -> bool:
    """
    Check whether an exception is a provider quota or rate-limit failure.

    Matches a 429 status code or any of QUOTA_MESSAGE_MARKERS in the
    lower-cased message, on the error or anything in its cause chain.

    Args:
        error: Exception raised by the external pipeline

    Returns:
        bool: True for quota/rate-limit failures
    """
    for current in _error_chain(error):
        if extract_status_code(current) == RATE_LIMIT_STATUS:
            return True
        message = str(current).lower()
        if any(marker in message for marker in QUOTA_MESSAGE_MARKERS):
            return True
    return False


def find_status_code(error: BaseException) -> int | None:
    """Return the first status code found along the cause chain."""
    for current in _error_chain(error):
        status = extract_status_code(current)
        if status is not None:
            return status
    return None
