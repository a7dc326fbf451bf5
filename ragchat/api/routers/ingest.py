"""
Ingestion API endpoint.

Routes: POST /ingest

Dependencies: ragchat.application.services.ingestion_service
System role: Document ingestion HTTP API
"""

from fastapi import APIRouter, Depends

from ragchat.api.deps import get_ingestion_service
from ragchat.application.services import IngestionService
from ragchat.models.common import ErrorResponse, InternalErrorResponse
from ragchat.models.document import IngestRequest, IngestResponse

router = APIRouter(tags=["ingest"])


@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": InternalErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def ingest_documents(
    request: IngestRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """Chunk and store a batch of documents.

    The whole batch is rejected if any document is malformed.

    Args:
        request: IngestRequest with documents
        ingestion_service: Injected IngestionService

    Returns:
        IngestResponse: Number of chunks added
    """
    result = await ingestion_service.ingest(request.documents)
    return IngestResponse(added=result.accepted_count)
