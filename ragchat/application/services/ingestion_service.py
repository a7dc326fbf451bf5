"""
Ingestion service for document chunking and storage.

Validates a batch of documents, splits each into overlapping chunks, tags
them with source metadata and submits the whole batch to the vector store in
one call. Invalid input rejects the entire batch before anything is stored.

Dependencies: pydantic, ragchat.core, ragchat.models
System role: Ingestion orchestration layer
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fastapi.concurrency import run_in_threadpool
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ragchat.application.services.base_service import PipelineBackedService
from ragchat.core.chunker import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, chunk_text
from ragchat.core.exceptions import (
    InternalServiceError,
    ServiceInitializingError,
    ValidationError,
)
from ragchat.core.rag_pipeline.factory import RAGPipeline
from ragchat.core.rag_pipeline.handle import PipelineHandle
from ragchat.models.chunk import Chunk, ChunkMetadata
from ragchat.models.document import IngestDocument
from ragchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

DOCUMENTS_NOT_ARRAY = "Documents must be an array"
MISSING_TEXT = "Each document must have a text field"
MISSING_ID_OR_TITLE = "Each document must have id and title fields"
NOT_AN_OBJECT = "Each document must be an object with id, title and text fields"

_documents_adapter = TypeAdapter(list[IngestDocument])


@dataclass(frozen=True)
class IngestResult:
    """Outcome of one ingestion call."""

    accepted_count: int


def validate_documents(documents: Any) -> list[IngestDocument]:
    """
    Validate a raw document batch as a whole.

    Args:
        documents: Sequence of mappings or IngestDocument instances

    Returns:
        list[IngestDocument]: Validated documents in input order

    Raises:
        ValidationError: On the first malformed document; nothing is processed
    """
    if isinstance(documents, (str, bytes)) or not isinstance(documents, Sequence):
        raise ValidationError(DOCUMENTS_NOT_ARRAY, field="documents")

    try:
        return _documents_adapter.validate_python(list(documents))
    except PydanticValidationError as e:
        errors = e.errors(include_url=False)
        index = errors[0]["loc"][0] if errors[0]["loc"] else None
        failed_fields = {
            err["loc"][1]
            for err in errors
            if len(err["loc"]) > 1 and err["loc"][0] == index
        }
        if "text" in failed_fields:
            message, field = MISSING_TEXT, "text"
        elif failed_fields & {"id", "title"}:
            message, field = MISSING_ID_OR_TITLE, ",".join(sorted(failed_fields & {"id", "title"}))
        else:
            message, field = NOT_AN_OBJECT, None
        raise ValidationError(
            message,
            field=field,
            details={
                "index": index,
                "errors": [
                    {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                    for err in errors
                ],
            },
        ) from e


def chunk_documents(
    documents: Sequence[IngestDocument],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[Chunk]:
    """
    Chunk every document and tag each chunk with its source and position.

    Chunk indices start at 0 for each document. Relative order across and
    within documents is preserved.
    """
    chunks: list[Chunk] = []
    for doc in documents:
        for index, content in enumerate(chunk_text(doc.text, chunk_size, chunk_overlap)):
            chunks.append(
                Chunk(
                    content=content,
                    metadata=ChunkMetadata(id=doc.id, title=doc.title, chunk_index=index),
                )
            )
    return chunks


class IngestionService(PipelineBackedService):
    """
    Ingestion orchestrator.

    Coordinates validation, chunking and the single batched vector store
    submission.
    """

    def __init__(
        self,
        pipeline_handle: PipelineHandle[RAGPipeline],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            pipeline_handle: Shared pipeline handle
            chunk_size: Maximum characters per chunk
            chunk_overlap: Characters shared by consecutive chunks
        """
        super().__init__(pipeline_handle)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    async def ingest(self, documents: Sequence[Mapping[str, Any] | IngestDocument]) -> IngestResult:
        """
        Validate, chunk and store a batch of documents.

        Flow:
        1. Validate the whole batch (no partial ingestion)
        2. Acquire the shared pipeline
        3. Chunk each document in order and tag metadata
        4. Submit all chunks in one add_documents call

        Args:
            documents: Documents with id, title and text

        Returns:
            IngestResult: Number of chunks submitted

        Raises:
            ValidationError: Malformed batch
            ServiceInitializingError: Pipeline not available
            InternalServiceError: Any store failure, throttling included
        """
        validated = validate_documents(documents)

        pipeline = await self._acquire_pipeline()
        if pipeline.vector_store is None:
            raise ServiceInitializingError()

        chunks = chunk_documents(validated, self.chunk_size, self.chunk_overlap)
        if not chunks:
            logger.info(f"{__name__}:ingest - Empty batch, nothing to store")
            return IngestResult(accepted_count=0)

        try:
            await run_in_threadpool(
                pipeline.vector_store.add_documents,
                [chunk.to_document() for chunk in chunks],
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:ingest - Vector store submission failed",
                e,
                documents=len(validated),
                chunks=len(chunks),
            )
            raise InternalServiceError(operation="ingest") from e

        logger.info(
            f"{__name__}:ingest - Stored {len(chunks)} chunks from {len(validated)} documents"
        )
        return IngestResult(accepted_count=len(chunks))
