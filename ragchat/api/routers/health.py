"""
Health check API endpoints.

Routes: GET /health, GET /health/config

Only booleans and non-secret configuration are exposed. Neither route
triggers pipeline initialization.

Dependencies: ragchat.api.deps, ragchat.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends

from ragchat.api.deps import get_pipeline_handle, get_settings_dependency
from ragchat.configs import Settings
from ragchat.core.rag_pipeline import PipelineHandle, RAGPipeline
from ragchat.models.health import HealthResponse, PipelineConfigResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    pipeline_handle: PipelineHandle[RAGPipeline] = Depends(get_pipeline_handle),
) -> HealthResponse:
    """Basic health check with pipeline readiness flags."""
    pipeline = pipeline_handle.current
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        vector_store=pipeline is not None and pipeline.vector_store is not None,
        qa_chain=pipeline is not None and pipeline.qa_chain is not None,
    )


@router.get("/config", response_model=PipelineConfigResponse)
async def pipeline_config(
    pipeline_handle: PipelineHandle[RAGPipeline] = Depends(get_pipeline_handle),
    settings: Settings = Depends(get_settings_dependency),
) -> PipelineConfigResponse:
    """Runtime configuration summary for operators."""
    pipeline = pipeline_handle.current
    return PipelineConfigResponse(
        mock_mode=settings.mock_mode,
        has_api_key=settings.llm.has_api_key,
        pipeline_state=pipeline_handle.state.value,
        store_type="memory" if settings.mock_mode else settings.vector_store.store_type,
        index_name=settings.vector_store.index_name,
        cached_vector_store=pipeline is not None and pipeline.vector_store is not None,
        cached_qa_chain=pipeline is not None and pipeline.qa_chain is not None,
        llm_model=settings.llm.model,
        embedding_model=settings.vector_store.embedding_model,
    )
