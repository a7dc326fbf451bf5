"""
Language model configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Generation provider configuration for the QA chain
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    model: str = Field(default="gemini-2.5-flash", description="Chat model used for answers")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Sampling temperature")
    google_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "LLM_GOOGLE_API_KEY"),
        description="Google Generative AI API key (embeddings and chat)",
    )

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty API key is configured."""
        return bool(self.google_api_key and self.google_api_key.get_secret_value())
