"""Tests for application wiring in main.py: root endpoints and error mapping."""

from fastapi.testclient import TestClient

from core.correlation import CORRELATION_HEADER
from models.config import settings


class TestRootEndpoint:
    """Tests for root and health endpoints."""

    def test_root_message_includes_project_name(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == f"Welcome to {settings.PROJECT_NAME} API"

    def test_health_endpoint(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestCorrelationHeader:
    """Every response carries a correlation ID."""

    def test_generates_correlation_id(self, client: TestClient):
        response = client.get("/api/health")

        assert len(response.headers[CORRELATION_HEADER]) == 8

    def test_echoes_incoming_correlation_id(self, client: TestClient):
        response = client.get("/api/health", headers={CORRELATION_HEADER: "req-42"})

        assert response.headers[CORRELATION_HEADER] == "req-42"

    def test_response_time_header(self, client: TestClient):
        response = client.get("/api/health")

        assert response.headers["X-Response-Time"].endswith("s")


class TestErrorMapping:
    """Domain exceptions map onto HTTP status codes."""

    def test_not_found_is_404_with_correlation_id(self, client: TestClient):
        response = client.get("/api/scam-reports/999")

        assert response.status_code == 404
        body = response.json()
        assert body["detail"] == "Scam report not found"
        assert body["correlation_id"] == response.headers[CORRELATION_HEADER]

    def test_missing_token_is_401(self, client: TestClient):
        response = client.post("/api/scam-reports", json={})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_non_admin_is_403(self, client: TestClient, auth_headers):
        response = client.get("/api/scam-reports/unpublished", headers=auth_headers)

        assert response.status_code == 403

    def test_malformed_body_is_400_with_fields(self, client: TestClient):
        response = client.post(
            "/api/contact", json={"name": "A", "email": "not-an-email"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Invalid request data"
        assert "email" in body["fields"]
        assert "subject" in body["fields"]
