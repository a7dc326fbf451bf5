"""
RAG pipeline: retrieval chain construction and the shared lazy handle.
"""

from ragchat.core.rag_pipeline.factory import RAGPipeline, abuild_pipeline, build_pipeline
from ragchat.core.rag_pipeline.handle import HandleState, PipelineHandle

__all__ = [
    "HandleState",
    "PipelineHandle",
    "RAGPipeline",
    "abuild_pipeline",
    "build_pipeline",
]
