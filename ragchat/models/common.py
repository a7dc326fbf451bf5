"""
Common response models.

Error schemas shared by all routers.

Dependencies: pydantic
System role: Common API response structures
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema for validation and initializing failures."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")


class QuotaErrorResponse(BaseModel):
    """Error response for provider quota / rate-limit failures."""

    error: str
    detail: str = Field(description="Human-readable explanation and next steps")
    docs: str = Field(description="Provider error documentation")
    troubleshooting: str = Field(description="LangChain troubleshooting guide")
    timestamp: datetime


class InternalErrorResponse(BaseModel):
    """Opaque error response for server faults."""

    error: str
    request_id: str | None = Field(default=None, description="Correlation ID for server logs")
