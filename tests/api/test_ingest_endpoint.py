"""
Test suite for POST /api/v1/ingest.

Tests status codes and response bodies for every outcome of the error
taxonomy. The pipeline handle is overridden with one over mocks.

System role: Verification of ingestion HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from ragchat.api.deps import get_pipeline_handle
from ragchat.api.error_handling import RETRY_AFTER_SECONDS
from ragchat.core.exceptions import PipelineInitializationError
from ragchat.core.rag_pipeline import PipelineHandle

INGEST_URL = "/api/v1/ingest"


@pytest.fixture
def client(app, pipeline_handle: PipelineHandle) -> TestClient:
    """Client whose services share the fake pipeline handle."""
    app.dependency_overrides[get_pipeline_handle] = lambda: pipeline_handle
    return TestClient(app)


class TestIngestEndpoint:
    """Test suite for successful ingestion."""

    def test_ingest_should_return_added_count(self, client, mock_vector_store: MagicMock) -> None:
        # Act
        response = client.post(
            INGEST_URL,
            json={"documents": [{"id": "doc1", "title": "T", "text": "x" * 1600}]},
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "added": 3}
        mock_vector_store.add_documents.assert_called_once()

    def test_empty_documents_should_add_nothing(self, client) -> None:
        response = client.post(INGEST_URL, json={"documents": []})

        assert response.status_code == 200
        assert response.json() == {"success": True, "added": 0}

    def test_correlation_id_should_be_echoed(self, client) -> None:
        response = client.post(
            INGEST_URL,
            json={"documents": []},
            headers={"X-Correlation-ID": "req-123"},
        )

        assert response.headers["X-Correlation-ID"] == "req-123"


class TestIngestEndpointErrors:
    """Test suite for error responses."""

    def test_invalid_text_should_return_400(self, client, mock_vector_store: MagicMock) -> None:
        response = client.post(
            INGEST_URL,
            json={"documents": [{"id": "doc1", "title": "T", "text": 123}]},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Each document must have a text field"
        assert body["details"]["index"] == 0
        mock_vector_store.add_documents.assert_not_called()

    def test_missing_id_should_return_400(self, client) -> None:
        response = client.post(INGEST_URL, json={"documents": [{"title": "T", "text": "hello"}]})

        assert response.status_code == 400
        assert response.json()["error"] == "Each document must have id and title fields"

    @pytest.mark.parametrize(
        "body",
        [{"documents": None}, {"documents": "x"}, {"documents": {"id": "a"}}, {}, {"docs": []}],
    )
    def test_non_array_documents_should_return_400(
        self, client, mock_vector_store: MagicMock, body: dict
    ) -> None:
        # Act
        response = client.post(INGEST_URL, json=body)

        # Assert
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"] == "Documents must be an array"
        assert response.json()["details"] == {"field": "documents"}
        mock_vector_store.add_documents.assert_not_called()

    @pytest.mark.parametrize("content", [b"not json", b"[]"])
    def test_unparseable_body_should_return_400(self, client, content: bytes) -> None:
        response = client.post(
            INGEST_URL, content=content, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"] == "Invalid request body"

    def test_pipeline_init_failure_should_return_503(self, app) -> None:
        handle = PipelineHandle(AsyncMock(side_effect=PipelineInitializationError("no key")))
        app.dependency_overrides[get_pipeline_handle] = lambda: handle
        client = TestClient(app)

        response = client.post(INGEST_URL, json={"documents": [{"id": "a", "title": "A", "text": "b"}]})

        assert response.status_code == 503
        assert response.headers["Retry-After"] == str(RETRY_AFTER_SECONDS)
        assert response.json()["error"] == "Service initializing, try again shortly"

    def test_store_rate_limit_should_return_500(
        self, client, mock_vector_store: MagicMock, rate_limit_error
    ) -> None:
        # Arrange
        mock_vector_store.add_documents.side_effect = rate_limit_error

        # Act
        response = client.post(
            INGEST_URL,
            json={"documents": [{"id": "a", "title": "A", "text": "b"}]},
            headers={"X-Correlation-ID": "req-429"},
        )

        # Assert
        assert response.status_code == 500
        assert response.json() == {
            "error": "An internal error occurred while processing your request.",
            "request_id": "req-429",
        }

    def test_store_failure_should_return_opaque_500(self, client, mock_vector_store: MagicMock) -> None:
        mock_vector_store.add_documents.side_effect = RuntimeError("password=hunter2")

        response = client.post(
            INGEST_URL,
            json={"documents": [{"id": "a", "title": "A", "text": "b"}]},
            headers={"X-Correlation-ID": "req-500"},
        )

        assert response.status_code == 500
        assert "hunter2" not in response.text
        assert response.json() == {
            "error": "An internal error occurred while processing your request.",
            "request_id": "req-500",
        }
