"""
Shared test fixtures and configuration for entire test suite.

Provides: Clean settings environment, fake pipeline and handle, FastAPI app/client
Dependencies: pytest, fastapi, unittest.mock
System role: Test infrastructure and fixture management
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from ragchat.api.deps import get_service_cache
from ragchat.configs import get_settings
from ragchat.core.rag_pipeline import PipelineHandle, RAGPipeline

SETTINGS_ENV_VARS = (
    "USE_MOCK",
    "DEMO_MODE",
    "PIPELINE_USE_MOCK",
    "GOOGLE_API_KEY",
    "LLM_GOOGLE_API_KEY",
    "PIPELINE_CHUNK_SIZE",
    "PIPELINE_CHUNK_OVERLAP",
    "PIPELINE_WARM_ON_STARTUP",
    "VECTOR_STORE_STORE_TYPE",
    "VECTOR_STORE_INDEX_DIR",
    "LOG_LEVEL",
    "CORS_ORIGINS",
)


class ProviderError(Exception):
    """Stand-in for an SDK error carrying an HTTP status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from ambient configuration and cached singletons."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_service_cache().clear()
    yield
    get_settings.cache_clear()
    get_service_cache().clear()


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Configure mock mode with an index directory under tmp_path.

    Returns:
        Path: Index directory
    """
    index_dir = tmp_path / "faiss_index"
    monkeypatch.setenv("USE_MOCK", "true")
    monkeypatch.setenv("VECTOR_STORE_INDEX_DIR", str(index_dir))
    get_settings.cache_clear()
    return index_dir


@pytest.fixture
def mock_vector_store() -> MagicMock:
    """Provide mock vector store accepting any batch."""
    store = MagicMock()
    store.add_documents.side_effect = lambda documents: [f"id-{i}" for i in range(len(documents))]
    return store


@pytest.fixture
def mock_qa_chain() -> MagicMock:
    """Provide mock QA chain returning a fixed answer."""
    chain = MagicMock()
    chain.ainvoke = AsyncMock(return_value={"answer": "Test answer", "context": []})
    return chain


@pytest.fixture
def fake_pipeline(mock_vector_store: MagicMock, mock_qa_chain: MagicMock) -> RAGPipeline:
    """Provide pipeline bundle built from mocks."""
    return RAGPipeline(
        vector_store=mock_vector_store,
        qa_chain=mock_qa_chain,
        model_name="test-model",
    )


@pytest.fixture
def pipeline_factory(fake_pipeline: RAGPipeline) -> AsyncMock:
    """Provide async factory that yields the fake pipeline after a short delay."""

    async def build() -> RAGPipeline:
        await asyncio.sleep(0.01)
        return fake_pipeline

    return AsyncMock(side_effect=build)


@pytest.fixture
def pipeline_handle(pipeline_factory: AsyncMock) -> PipelineHandle[RAGPipeline]:
    """Provide uninitialized handle over the fake pipeline."""
    return PipelineHandle(pipeline_factory)


@pytest.fixture
def app():
    """Provide fresh application instance without running its lifespan."""
    from ragchat.api.main import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def rate_limit_error() -> ProviderError:
    """Provide provider error as raised for HTTP 429."""
    return ProviderError("Rate limit exceeded", status=429)
