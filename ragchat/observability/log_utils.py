"""
Logging helpers for user-supplied values.

Queries and document bodies only reach the logs as bounded previews, and
collections are summarized by size.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from collections.abc import Mapping, Set
from typing import Any

MAX_LOG_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_LOG_VALUE_LENGTH) -> str:
    """
    Render a value for a log record without flooding it.

    Args:
        value: Anything; strings are previewed, collections summarized
        max_length: Preview length before truncation

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        text = value
    elif isinstance(value, (list, tuple, Set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, Mapping):
        text = f"dict({len(value)} keys)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _safe_extra(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log `message` with every context value passed through safe_log_value."""
    logger.log(level, message, extra=_safe_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log a caught exception once, with traceback and safe context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Caught exception
        **context: Extra fields for the record
    """
    extra = _safe_extra(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
