"""
Logger configuration.

One stdout handler on the root logger. Every record is stamped with the
request's correlation ID so ingestion and query logs can be joined per
request.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from ragchat.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Provider SDKs and HTTP clients log every call at INFO
NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "google", "grpc", "faiss")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID ("-" outside requests) to records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler and set levels.

    Safe to call more than once; previous root handlers are replaced.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
