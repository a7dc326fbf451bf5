"""
In-process vector store.

Backs mock/demo mode (with deterministic fake embeddings) and the 'memory'
store type. Contents are lost on restart.

Dependencies: langchain_core.vectorstores
System role: Alternate vector store implementation
"""

import logging

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.retrievers import BaseRetriever
from langchain_core.vectorstores import InMemoryVectorStore

from ragchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class InMemoryVectorsStore:
    """LangChain InMemoryVectorStore behind the VectorStoreClient protocol."""

    def __init__(self, embeddings: Embeddings) -> None:
        self._vector_store = InMemoryVectorStore(embedding=embeddings)

    def __len__(self) -> int:
        return len(self._vector_store.store)

    def add_documents(self, documents: list[Document]) -> list[str]:
        """Embed and keep documents in memory."""
        if not documents:
            return []
        try:
            doc_ids = self._vector_store.add_documents(documents)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to add {len(documents)} documents: {e}",
                operation="add",
            ) from e
        logger.info(f"{__name__}:add_documents - Added {len(doc_ids)} documents")
        return doc_ids

    def as_retriever(self, k: int = 4) -> BaseRetriever:
        return self._vector_store.as_retriever(search_kwargs={"k": k})
