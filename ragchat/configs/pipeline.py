"""
RAG pipeline configuration settings.

Chunking parameters and mock/demo mode switch.

Dependencies: pydantic, pydantic_settings
System role: Ingestion and pipeline lifecycle configuration
"""

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Chunking and pipeline lifecycle configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIPELINE_",
        case_sensitive=False,
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    use_mock: bool = Field(
        default=False,
        validation_alias=AliasChoices("USE_MOCK", "DEMO_MODE", "PIPELINE_USE_MOCK"),
        description="Use in-memory stand-ins instead of the real providers",
    )
    chunk_size: int = Field(default=800, gt=0, description="Maximum characters per chunk")
    chunk_overlap: int = Field(default=100, ge=0, description="Characters shared by consecutive chunks")
    warm_on_startup: bool = Field(
        default=True,
        description="Build the pipeline during application startup",
    )

    @model_validator(mode="after")
    def check_overlap(self) -> "PipelineSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
