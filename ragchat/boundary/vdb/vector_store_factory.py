"""
Vector store factory for selecting between FAISS and in-memory stores.

Depends on VECTOR_STORE_STORE_TYPE and the mock mode switch. Mock mode always
yields an in-memory store with deterministic fake embeddings so the service
runs without provider credentials.

Dependencies: langchain_google_genai, langchain_core, ragchat.boundary.vdb, ragchat.configs
System role: Vector store instantiation and selection
"""

import logging

from langchain_core.embeddings import DeterministicFakeEmbedding, Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ragchat.boundary.vdb.faiss_vectors_store import FAISSVectorsStore
from ragchat.boundary.vdb.in_memory_store import InMemoryVectorsStore
from ragchat.boundary.vdb.vector_store_client import VectorStoreClient
from ragchat.configs import Settings

logger = logging.getLogger(__name__)

STORE_TYPES = ("faiss", "memory")


def get_embeddings(settings: Settings) -> Embeddings:
    """
    Build the embedding model for the configured mode.

    Args:
        settings: Application settings

    Returns:
        Embeddings: Gemini embeddings, or deterministic fakes in mock mode
    """
    if settings.mock_mode:
        logger.info(f"{__name__}:get_embeddings - Using deterministic fake embeddings (mock mode)")
        return DeterministicFakeEmbedding(size=settings.vector_store.mock_embedding_size)

    return GoogleGenerativeAIEmbeddings(
        model=settings.vector_store.embedding_model,
        google_api_key=settings.llm.google_api_key,
    )


def get_vector_store(settings: Settings) -> VectorStoreClient:
    """
    Factory function to get vector store based on configuration.

    Args:
        settings: Application settings

    Returns:
        FAISSVectorsStore or InMemoryVectorsStore: Configured vector store instance

    Raises:
        ValueError: If the store type is invalid
    """
    store_type = "memory" if settings.mock_mode else settings.vector_store.store_type.lower()
    if store_type not in STORE_TYPES:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be one of: {', '.join(STORE_TYPES)}."
        )

    embeddings = get_embeddings(settings)

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_store - Creating FAISS vector store at {settings.vector_store.index_dir}")
        return FAISSVectorsStore(
            embeddings=embeddings,
            index_dir=settings.vector_store.index_dir,
            index_name=settings.vector_store.index_name,
        )

    logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store")
    return InMemoryVectorsStore(embeddings=embeddings)
