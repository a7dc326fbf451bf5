"""
Chunk domain model.

A contiguous slice of a document's text tagged with its source document and
position. Chunks only live for the duration of one ingestion call.

Dependencies: pydantic, langchain_core
System role: Document chunk data structure
"""

from langchain_core.documents import Document
from pydantic import BaseModel, Field


class ChunkMetadata(BaseModel):
    """Metadata stored alongside each chunk in the vector store."""

    id: str = Field(description="Source document identifier")
    title: str = Field(description="Source document title")
    chunk_index: int = Field(ge=0, description="Zero-based position within the source document")


class Chunk(BaseModel):
    """Document chunk model."""

    content: str = Field(description="Chunk text content")
    metadata: ChunkMetadata

    def to_document(self) -> Document:
        """Convert to a LangChain Document for vector store submission."""
        return Document(page_content=self.content, metadata=self.metadata.model_dump())
