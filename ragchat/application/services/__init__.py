"""Service orchestrators."""

from .ingestion_service import IngestionService, IngestResult
from .query_service import QueryAnswer, QueryService

__all__ = [
    "IngestResult",
    "IngestionService",
    "QueryAnswer",
    "QueryService",
]
