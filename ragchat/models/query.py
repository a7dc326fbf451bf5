"""
Query schemas.

Request/response schemas for POST /query.

Dependencies: pydantic
System role: Query API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request schema for questions.

    The query is checked by the query service so missing, non-string and
    blank questions share one error message.
    """

    query: Any = Field(default=None, description="Natural-language question")


class AnswerMetadata(BaseModel):
    """Provenance of an answer."""

    timestamp: datetime
    model: str


class QueryResponse(BaseModel):
    """Response schema for answers."""

    answer: str | None = Field(description="Answer text, null when the pipeline returned none")
    metadata: AnswerMetadata
