"""
FAISS vector store persisted to a local directory.

Loads an existing index on startup or creates an empty one sized from the
embedding model. Every batch added is saved back to disk.

Dependencies: faiss-cpu, langchain_community.vectorstores, langchain_core
System role: Default vector store for RAG retrieval
"""

import logging
import threading
from pathlib import Path

import faiss
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.retrievers import BaseRetriever

from ragchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

DIMENSION_PROBE_TEXT = "dimension probe"


class FAISSVectorsStore:
    """
    FAISS vector store wrapper.

    Wraps LangChain FAISS with on-disk persistence. Writes are serialized
    because the local index and its save are not safe to run concurrently.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        index_dir: str | Path = "/tmp/.faiss_index",
        index_name: str = "thummimng",
    ) -> None:
        """
        Initialize FAISS vector store.

        Args:
            embeddings: Embedding model used for documents and queries
            index_dir: Directory for index persistence
            index_name: Index file name (without extension)

        Raises:
            VectorStoreError: When an existing index cannot be loaded
        """
        self._embeddings = embeddings
        self._index_dir = Path(index_dir)
        self._index_name = index_name
        self._write_lock = threading.Lock()

        self._index_dir.mkdir(parents=True, exist_ok=True)
        self._vector_store = self._load_or_create_index()

    @property
    def index_path(self) -> Path:
        """Path of the persisted .faiss file."""
        return self._index_dir / f"{self._index_name}.faiss"

    def _load_or_create_index(self) -> FAISS:
        """Load existing FAISS index or create new one."""
        if self.index_path.exists():
            logger.info(f"{__name__}:_load_or_create_index - Loading existing index from {self._index_dir}")
            try:
                return FAISS.load_local(
                    str(self._index_dir),
                    self._embeddings,
                    index_name=self._index_name,
                    allow_dangerous_deserialization=True,
                )
            except Exception as e:
                raise VectorStoreError(
                    f"Failed to load FAISS index: {e}",
                    operation="load",
                    details={"index_dir": str(self._index_dir)},
                ) from e

        logger.info(f"{__name__}:_load_or_create_index - Creating new FAISS index '{self._index_name}'")
        # Embedding call also verifies provider credentials
        dimension = len(self._embeddings.embed_query(DIMENSION_PROBE_TEXT))
        vector_store = FAISS(
            embedding_function=self._embeddings,
            index=faiss.IndexFlatL2(dimension),
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
        )
        vector_store.save_local(str(self._index_dir), index_name=self._index_name)
        logger.info(f"{__name__}:_load_or_create_index - Created index with dimension={dimension}")
        return vector_store

    def add_documents(self, documents: list[Document]) -> list[str]:
        """
        Add documents to the FAISS index and persist it.

        Args:
            documents: LangChain Documents with content and metadata

        Returns:
            list[str]: Generated document IDs

        Raises:
            VectorStoreError: When embedding or saving fails
        """
        if not documents:
            return []

        with self._write_lock:
            try:
                doc_ids = self._vector_store.add_documents(documents)
                self._vector_store.save_local(str(self._index_dir), index_name=self._index_name)
            except Exception as e:
                logger.error(f"{__name__}:add_documents - {type(e).__name__}: {e}")
                raise VectorStoreError(
                    f"Failed to add {len(documents)} documents: {e}",
                    operation="add",
                ) from e

        logger.info(f"{__name__}:add_documents - Added {len(doc_ids)} documents")
        return doc_ids

    def as_retriever(self, k: int = 4) -> BaseRetriever:
        """
        Create a LangChain similarity retriever.

        Args:
            k: Number of results per query

        Returns:
            BaseRetriever: LangChain retriever
        """
        return self._vector_store.as_retriever(search_kwargs={"k": k})
