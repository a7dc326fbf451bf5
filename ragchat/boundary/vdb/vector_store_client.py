"""
Vector store capability interface.

The orchestrators only need to add documents and build a retriever; every
backend (FAISS on disk, in-memory) implements this protocol.

Dependencies: langchain_core
System role: Contract between services and vector store adapters
"""

from typing import Protocol, runtime_checkable

from langchain_core.documents import Document
from langchain_core.retrievers import BaseRetriever


@runtime_checkable
class VectorStoreClient(Protocol):
    """Minimal vector store surface used by ingestion and retrieval."""

    def add_documents(self, documents: list[Document]) -> list[str]:
        """Embed and store documents in one batch, returning their IDs."""
        ...

    def as_retriever(self, k: int = 4) -> BaseRetriever:
        """Build a retriever returning the top-k documents for a query."""
        ...
