"""
Query service for retrieval-augmented answers.

Validates the question, runs it through the shared QA chain exactly once and
classifies provider failures (quota / rate limit vs everything else).

Dependencies: ragchat.core
System role: Query orchestration layer
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ragchat.application.services.base_service import PipelineBackedService
from ragchat.core.exceptions import ServiceInitializingError, ValidationError
from ragchat.core.rag_pipeline.factory import RAGPipeline
from ragchat.core.rag_pipeline.handle import PipelineHandle
from ragchat.observability.log_utils import log_exception_with_context, safe_log_value

logger = logging.getLogger(__name__)

INVALID_QUERY = "Query must be a non-empty string"

# Checked in order; the first populated field is the answer
ANSWER_FIELDS: tuple[str, ...] = ("answer", "output_text")


@dataclass(frozen=True)
class QueryAnswer:
    """Answer plus provenance. Never persisted."""

    answer: str | None
    model: str
    timestamp: datetime


def extract_answer(result: Any, fields: tuple[str, ...] = ANSWER_FIELDS) -> str | None:
    """
    Pick the answer text out of a pipeline result.

    Args:
        result: Chain output (mapping or object with attributes)
        fields: Field names in priority order

    Returns:
        str | None: First non-empty field value, else None
    """
    for field in fields:
        if isinstance(result, Mapping):
            value = result.get(field)
        else:
            value = getattr(result, field, None)
        if value:
            return value if isinstance(value, str) else str(value)
    return None


class QueryService(PipelineBackedService):
    """
    Query orchestrator.

    Forwards the caller's original (untrimmed) question to the QA chain.
    """

    def __init__(
        self,
        pipeline_handle: PipelineHandle[RAGPipeline],
        answer_fields: tuple[str, ...] = ANSWER_FIELDS,
    ) -> None:
        """
        Initialize query service.

        Args:
            pipeline_handle: Shared pipeline handle
            answer_fields: Result fields holding the answer, in priority order
        """
        super().__init__(pipeline_handle)
        self.answer_fields = answer_fields

    async def answer(self, query: Any) -> QueryAnswer:
        """
        Answer a question using retrieval-augmented generation.

        Args:
            query: User's question

        Returns:
            QueryAnswer: Answer text, model name and UTC timestamp

        Raises:
            ValidationError: Query is not a string or is blank
            ServiceInitializingError: Pipeline not available
            QuotaOrRateLimitError: Provider quota exhausted or rate limited
            InternalServiceError: Any other pipeline failure
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError(INVALID_QUERY, field="query")

        pipeline = await self._acquire_pipeline()
        if pipeline.qa_chain is None:
            raise ServiceInitializingError()

        logger.info(f"{__name__}:answer - START query={safe_log_value(query, max_length=100)!r}")
        try:
            result = await pipeline.qa_chain.ainvoke({"input": query})
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:answer - QA chain failed",
                e,
                query_len=len(query),
            )
            raise self._classify_failure(e, operation="query") from e

        answer = extract_answer(result, self.answer_fields)
        if answer is None:
            logger.warning(f"{__name__}:answer - Pipeline returned no answer field")

        return QueryAnswer(
            answer=answer,
            model=pipeline.model_name,
            timestamp=datetime.now(timezone.utc),
        )
