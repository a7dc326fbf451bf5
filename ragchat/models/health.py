"""
Health and introspection schemas.

Dependencies: pydantic
System role: Health check API contracts
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    vector_store: bool
    qa_chain: bool


class PipelineConfigResponse(BaseModel):
    """Non-secret runtime configuration view."""

    ok: bool = True
    mock_mode: bool
    has_api_key: bool
    pipeline_state: str
    store_type: str
    index_name: str
    cached_vector_store: bool
    cached_qa_chain: bool
    llm_model: str
    embedding_model: str
