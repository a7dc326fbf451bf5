"""
Document ingestion schemas.

Request/response schemas for POST /ingest.

Dependencies: pydantic
System role: Ingestion API contracts
"""

from typing import Any

from pydantic import BaseModel, Field, StrictStr


class IngestDocument(BaseModel):
    """One caller-supplied document."""

    id: StrictStr = Field(min_length=1, description="Caller-supplied document identifier")
    title: StrictStr = Field(min_length=1, description="Document title")
    text: StrictStr = Field(min_length=1, description="Raw document text")


class IngestRequest(BaseModel):
    """Request schema for document ingestion.

    The batch is validated by the ingestion service so a missing or non-array
    value and malformed elements each get a single, specific message.
    """

    documents: Any = Field(default=None, description="Documents with id, title and text fields")


class IngestResponse(BaseModel):
    """Response schema for document ingestion."""

    success: bool = True
    added: int = Field(ge=0, description="Number of chunks submitted to the vector store")
