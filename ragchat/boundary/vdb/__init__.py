"""
Vector database boundary layer.

Provides vector store clients for storage and retrieval operations.
- FAISSVectorsStore: Persisted local FAISS index
- InMemoryVectorsStore: In-process store (mock mode, ephemeral deployments)

Dependencies: langchain_community, langchain_core
System role: Vector store adapter for RAG retrieval
"""

from ragchat.boundary.vdb.vector_store_client import VectorStoreClient

__all__ = ["VectorStoreClient"]
