"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_ingestion_service,
    get_pipeline_handle,
    get_query_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_ingestion_service",
    "get_pipeline_handle",
    "get_query_service",
    "get_service_cache",
    "get_settings_dependency",
]
