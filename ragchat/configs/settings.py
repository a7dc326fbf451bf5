"""
Unified application settings.

Aggregates the per-concern settings and decides whether the service runs
against real providers or in mock mode.

Dependencies: ragchat.configs.*
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from ragchat.configs.base import BaseSettings
from ragchat.configs.llm import LLMSettings
from ragchat.configs.pipeline import PipelineSettings
from ragchat.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Server settings plus vector store, LLM and pipeline sections."""

    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)

    @property
    def mock_mode(self) -> bool:
        """True when mocks are requested or no provider key is configured."""
        return self.pipeline.use_mock or not self.llm.has_api_key


@lru_cache
def get_settings() -> Settings:
    """
    Settings singleton, read from the environment on first call.

    Tests call get_settings.cache_clear() after changing the environment.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
