"""
Observability module.

Logging configuration, log-safe helpers and correlation ID tracking.
"""

from ragchat.observability.correlation import correlation_scope, get_correlation_id
from ragchat.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "correlation_scope", "get_correlation_id", "get_logger"]
