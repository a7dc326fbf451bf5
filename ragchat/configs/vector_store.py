"""
Vector store configuration settings.

Selects the vector store backend and the embedding model used to fill it.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS on disk, or in-memory)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    store_type: str = Field(
        default="faiss",
        description="Vector store type: 'faiss' for a persisted local index, 'memory' for in-process",
    )
    index_dir: str = Field(
        default="/tmp/.faiss_index",
        description="Directory holding the persisted FAISS index",
    )
    index_name: str = Field(default="thummimng", description="FAISS index / collection name")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    mock_embedding_size: int = Field(
        default=256,
        description="Vector size of the deterministic fake embeddings used in mock mode",
    )

    top_k: int = Field(default=4, ge=1, description="Number of chunks retrieved per query")
