"""
Shared plumbing for services backed by the RAG pipeline.

Dependencies: ragchat.core
System role: Pipeline acquisition and failure classification
"""

import logging

from ragchat.core.error_classifier import find_status_code, is_quota_or_rate_limit_error
from ragchat.core.exceptions import (
    InternalServiceError,
    QuotaOrRateLimitError,
    RagChatException,
    ServiceInitializingError,
)
from ragchat.core.rag_pipeline.factory import RAGPipeline
from ragchat.core.rag_pipeline.handle import PipelineHandle

logger = logging.getLogger(__name__)


class PipelineBackedService:
    """Base class for orchestrators that share the lazily built pipeline."""

    def __init__(self, pipeline_handle: PipelineHandle[RAGPipeline]) -> None:
        """
        Initialize service.

        Args:
            pipeline_handle: Process-wide pipeline handle
        """
        self.pipeline_handle = pipeline_handle

    async def _acquire_pipeline(self) -> RAGPipeline:
        """
        Wait for the shared pipeline.

        Returns:
            RAGPipeline: Ready pipeline

        Raises:
            ServiceInitializingError: When initialization has failed; a later
                call retries it
        """
        try:
            return await self.pipeline_handle.get()
        except Exception as e:
            logger.error(
                f"{__name__}:_acquire_pipeline - Pipeline unavailable: {type(e).__name__}: {e}"
            )
            raise ServiceInitializingError(
                details={"state": self.pipeline_handle.state.value}
            ) from e

    @staticmethod
    def _classify_failure(error: BaseException, operation: str) -> RagChatException:
        """Map a raw query failure onto the error taxonomy.

        Ingestion does not use this; every store failure there is internal.
        """
        if is_quota_or_rate_limit_error(error):
            return QuotaOrRateLimitError(status_code=find_status_code(error))
        return InternalServiceError(operation=operation)
