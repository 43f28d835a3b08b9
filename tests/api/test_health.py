"""Tests for health check and middleware."""

from datetime import datetime
from unittest.mock import MagicMock

from fastapi.testclient import TestClient


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns UP with an ISO timestamp."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "UP"
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


def test_generates_request_id_if_not_provided(client: TestClient) -> None:
    """Should generate request ID if not in request headers."""
    response = client.get("/api/health")
    assert len(response.headers["X-Request-ID"]) == 36


def test_uses_provided_request_id(client: TestClient) -> None:
    """Should use request ID from request headers."""
    response = client.get("/api/health", headers={"X-Request-ID": "custom-id-123"})
    assert response.headers["X-Request-ID"] == "custom-id-123"


def test_unhandled_exception_returns_internal_error(
    client: TestClient, mock_shopify_client: MagicMock
) -> None:
    """Unexpected exceptions become a 500 envelope carrying the request ID."""
    mock_shopify_client.fetch.side_effect = RuntimeError("bug in catalog code")

    response = client.get("/collections", headers={"X-Request-ID": "req-500"})

    assert response.status_code == 500
    assert response.json() == {
        "error_code": "INTERNAL_ERROR",
        "message": "An internal error occurred",
        "details": {},
        "request_id": "req-500",
    }
    assert response.headers["X-Request-ID"] == "req-500"
