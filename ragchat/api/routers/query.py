"""
Query API endpoint.

Routes: POST /query

Dependencies: ragchat.application.services.query_service
System role: Question answering HTTP API
"""

from fastapi import APIRouter, Depends

from ragchat.api.deps import get_query_service
from ragchat.application.services import QueryService
from ragchat.models.common import ErrorResponse, InternalErrorResponse, QuotaErrorResponse
from ragchat.models.query import AnswerMetadata, QueryRequest, QueryResponse

router = APIRouter(tags=["query"])


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": QuotaErrorResponse},
        500: {"model": InternalErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def query(
    request: QueryRequest,
    query_service: QueryService = Depends(get_query_service),
) -> QueryResponse:
    """Answer a question from the ingested documents.

    Args:
        request: QueryRequest with the question
        query_service: Injected QueryService

    Returns:
        QueryResponse: Answer with timestamp and model metadata
    """
    result = await query_service.answer(request.query)
    return QueryResponse(
        answer=result.answer,
        metadata=AnswerMetadata(timestamp=result.timestamp, model=result.model),
    )
