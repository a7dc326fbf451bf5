"""
RAG pipeline factory.

Builds the vector store and QA chain bundle shared by ingestion and query.
Selects real providers or mock stand-ins from configuration; services never
branch on the mode themselves.

Dependencies: langchain_google_genai, ragchat.boundary.vdb, ragchat.configs
System role: Pipeline instantiation and selection
"""

import logging
from dataclasses import dataclass

from fastapi.concurrency import run_in_threadpool
from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_google_genai import ChatGoogleGenerativeAI

from ragchat.boundary.vdb.vector_store_client import VectorStoreClient
from ragchat.boundary.vdb.vector_store_factory import get_vector_store
from ragchat.configs import Settings, get_settings
from ragchat.core.exceptions import PipelineInitializationError
from ragchat.core.rag_pipeline.chain import (
    build_answer_chain,
    build_demo_answer_chain,
    build_retrieval_chain,
)

logger = logging.getLogger(__name__)

INIT_FAILURE_HINT = (
    "Check that GOOGLE_API_KEY is set and valid and that VECTOR_STORE_INDEX_DIR "
    "points to a writable directory."
)


@dataclass(frozen=True)
class RAGPipeline:
    """Shared handles for ingestion (vector_store) and query (qa_chain)."""

    vector_store: VectorStoreClient | None
    qa_chain: Runnable | None
    model_name: str
    mock_mode: bool = False


def get_chat_model(settings: Settings) -> BaseChatModel:
    """Build the Gemini chat model from settings."""
    return ChatGoogleGenerativeAI(
        model=settings.llm.model,
        temperature=settings.llm.temperature,
        google_api_key=settings.llm.google_api_key,
    )


def build_pipeline(settings: Settings) -> RAGPipeline:
    """
    Construct the vector store and QA chain. Blocking.

    Args:
        settings: Application settings

    Returns:
        RAGPipeline: Ready-to-use pipeline

    Raises:
        PipelineInitializationError: When any component fails to build
    """
    mock_mode = settings.mock_mode
    if mock_mode:
        logger.warning(
            f"{__name__}:build_pipeline - Running in MOCK mode (USE_MOCK=true or GOOGLE_API_KEY missing). "
            "Using in-memory mocks."
        )

    try:
        vector_store = get_vector_store(settings)
        retriever = vector_store.as_retriever(k=settings.vector_store.top_k)
        if mock_mode:
            answer_chain = build_demo_answer_chain()
        else:
            answer_chain = build_answer_chain(get_chat_model(settings))
        qa_chain = build_retrieval_chain(retriever, answer_chain)
    except Exception as e:
        raise PipelineInitializationError(
            f"Initialization failed: {e}. {INIT_FAILURE_HINT}",
            details={"mock_mode": mock_mode, "error_type": type(e).__name__},
        ) from e

    logger.info(f"{__name__}:build_pipeline - RAG pipeline initialized successfully (model={settings.llm.model})")
    return RAGPipeline(
        vector_store=vector_store,
        qa_chain=qa_chain,
        model_name=settings.llm.model,
        mock_mode=mock_mode,
    )


async def abuild_pipeline(settings: Settings | None = None) -> RAGPipeline:
    """Async wrapper running build_pipeline in the threadpool."""
    return await run_in_threadpool(build_pipeline, settings or get_settings())
