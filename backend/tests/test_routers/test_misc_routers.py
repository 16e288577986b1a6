"""Tests for stats, comments, contact, chat and file endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from models.schemas import ChatResponse


class TestScamStatsRouter:
    """GET /api/scam-stats"""

    def test_zero_snapshot_before_any_report(self, client: TestClient):
        response = client.get("/api/scam-stats")

        assert response.status_code == 200
        data = response.json()
        assert data["totalReports"] == 0
        assert data["scope"] == "published"

    def test_counts_follow_reports(self, client: TestClient, create_report):
        create_report()
        create_report(scam_type="email", identifier="x@phish.example")

        data = client.get("/api/scam-stats").json()

        assert data["totalReports"] == 2
        assert data["phoneScams"] == 1
        assert data["emailScams"] == 1
        assert data["businessScams"] == 0

    def test_all_scope_admin_only(
        self, client: TestClient, auth_headers, admin_auth_headers
    ):
        assert client.get("/api/scam-stats?scope=all").status_code == 403
        assert (
            client.get("/api/scam-stats?scope=all", headers=auth_headers).status_code
            == 403
        )

        response = client.get("/api/scam-stats?scope=all", headers=admin_auth_headers)
        assert response.status_code == 200
        assert response.json()["scope"] == "all"


class TestScamCommentsRouter:
    """POST /api/scam-comments"""

    def test_create_comment(self, client: TestClient, test_report, other_auth_headers):
        response = client.post(
            "/api/scam-comments",
            json={"scamReportId": test_report.id, "content": "Got the same call"},
            headers=other_auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["content"] == "Got the same call"
        assert response.json()["scamReportId"] == test_report.id

    def test_requires_login(self, client: TestClient, test_report):
        response = client.post(
            "/api/scam-comments",
            json={"scamReportId": test_report.id, "content": "hi"},
        )
        assert response.status_code == 401

    def test_missing_report(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/scam-comments",
            json={"scamReportId": 999, "content": "hi"},
            headers=auth_headers,
        )
        assert response.status_code == 404


class TestContactRouter:
    def test_submit(self, client: TestClient):
        response = client.post(
            "/api/contact",
            json={
                "name": "Sam",
                "email": "sam@example.com",
                "subject": "Hello",
                "message": "Thanks for the site",
                "category": "feedback",
            },
        )

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_invalid_email(self, client: TestClient):
        response = client.post(
            "/api/contact",
            json={"name": "Sam", "email": "nope", "subject": "Hi", "message": "x"},
        )

        assert response.status_code == 400
        assert response.json()["fields"] == ["email"]


class TestChatRouter:
    """POST /api/ai-chat"""

    BODY = {"messages": [{"role": "user", "content": "Was this call a scam?"}]}

    def test_fallback_mode(self, client: TestClient):
        response = client.post("/api/ai-chat", json=self.BODY)

        assert response.status_code == 200
        assert response.json()["source"] == "fallback"
        assert "error" not in response.json()

    def test_upstream_error_is_500(self, client: TestClient):
        failure = ChatResponse(response="Sorry", source="error", error="Failed to get AI response")

        with patch(
            "routers.chat_router.ChatService.ask", new=AsyncMock(return_value=failure)
        ):
            response = client.post("/api/ai-chat", json=self.BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to get AI response"

    def test_empty_conversation(self, client: TestClient):
        response = client.post("/api/ai-chat", json={"messages": []})
        assert response.status_code == 400


class TestFilesRouter:
    def test_unknown_file(self, client: TestClient, upload_dir):
        assert client.get("/api/files/nothing-here.pdf").status_code == 404
