"""
Dependency injection container.

Factory functions for FastAPI dependencies. The pipeline handle is built once
per process and shared by every request.

Dependencies: ragchat.configs, ragchat.application, ragchat.core
System role: DI container for service injection
"""

from fastapi import Depends

from ragchat.application.services import IngestionService, QueryService
from ragchat.configs import Settings, get_settings
from ragchat.core.rag_pipeline import PipelineHandle, RAGPipeline, abuild_pipeline


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._pipeline_handle: PipelineHandle[RAGPipeline] | None = None

    @property
    def pipeline_handle(self) -> PipelineHandle[RAGPipeline]:
        """Get cached pipeline handle. Does not build the pipeline itself."""
        if self._pipeline_handle is None:
            self._pipeline_handle = PipelineHandle(abuild_pipeline)
        return self._pipeline_handle

    def clear(self) -> None:
        """Clear all cached instances."""
        if self._pipeline_handle is not None:
            self._pipeline_handle.reset()
        self._pipeline_handle = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_pipeline_handle() -> PipelineHandle[RAGPipeline]:
    """Get the shared pipeline handle."""
    return get_service_cache().pipeline_handle


def get_ingestion_service(
    pipeline_handle: PipelineHandle[RAGPipeline] = Depends(get_pipeline_handle),
    settings: Settings = Depends(get_settings_dependency),
) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        pipeline_handle: Shared pipeline handle (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        IngestionService: Ingestion service with configured chunking
    """
    return IngestionService(
        pipeline_handle=pipeline_handle,
        chunk_size=settings.pipeline.chunk_size,
        chunk_overlap=settings.pipeline.chunk_overlap,
    )


def get_query_service(
    pipeline_handle: PipelineHandle[RAGPipeline] = Depends(get_pipeline_handle),
) -> QueryService:
    """
    Get query service instance.

    Args:
        pipeline_handle: Shared pipeline handle (injected via Depends)

    Returns:
        QueryService: Query service bound to the shared QA chain
    """
    return QueryService(pipeline_handle=pipeline_handle)
