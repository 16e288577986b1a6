"""Tests for the consolidated scams API."""

from fastapi.testclient import TestClient


class TestListConsolidatedScams:
    def test_most_reported_first(self, client: TestClient, create_report, other_user):
        create_report(identifier="555-0100")
        create_report(identifier="555-0100", reporter=other_user)
        create_report(identifier="555-0199")

        groups = client.get("/api/consolidated-scams").json()

        assert [(g["identifier"], g["reportCount"]) for g in groups] == [
            ("555-0100", 2),
            ("555-0199", 1),
        ]

    def test_by_type(self, client: TestClient, create_report):
        create_report()
        create_report(scam_type="business", identifier="Acme Refunds")

        groups = client.get("/api/consolidated-scams/by-type/business").json()

        assert [g["identifier"] for g in groups] == ["Acme Refunds"]

    def test_groups_of_unpublished_reports_hidden_from_public(
        self, client: TestClient, create_report, admin_user, admin_auth_headers, db_session
    ):
        from services.consolidation_service import ConsolidationService
        from services.scam_report_service import ScamReportService

        create_report(identifier="555-0100")
        hidden = create_report(identifier="555-0199")
        ScamReportService.set_published(db_session, hidden.id, admin_user, False)
        group = ConsolidationService.get_group_for_report(db_session, hidden.id)

        public = client.get("/api/consolidated-scams").json()
        by_type = client.get("/api/consolidated-scams/by-type/phone").json()
        as_admin = client.get("/api/consolidated-scams", headers=admin_auth_headers).json()

        assert [g["identifier"] for g in public] == ["555-0100"]
        assert [g["identifier"] for g in by_type] == ["555-0100"]
        assert {g["identifier"] for g in as_admin} == {"555-0100", "555-0199"}
        assert client.get(f"/api/consolidated-scams/{group.id}").status_code == 404
        assert (
            client.get(
                f"/api/consolidated-scams/{group.id}", headers=admin_auth_headers
            ).status_code
            == 200
        )


class TestConsolidatedScamDetail:
    def test_detail_hides_unpublished_from_public(
        self,
        client: TestClient,
        create_report,
        other_user,
        admin_user,
        admin_auth_headers,
        db_session,
    ):
        from services.consolidation_service import ConsolidationService
        from services.scam_report_service import ScamReportService

        first = create_report()
        second = create_report(reporter=other_user)
        ScamReportService.set_published(db_session, second.id, admin_user, False)
        group = ConsolidationService.get_group_for_report(db_session, first.id)

        public = client.get(f"/api/consolidated-scams/{group.id}").json()
        assert public["reportCount"] == 2
        assert [r["id"] for r in public["reports"]] == [first.id]

        as_admin = client.get(
            f"/api/consolidated-scams/{group.id}", headers=admin_auth_headers
        ).json()
        assert {r["id"] for r in as_admin["reports"]} == {first.id, second.id}

    def test_missing_group(self, client: TestClient):
        assert client.get("/api/consolidated-scams/999").status_code == 404
        assert client.get("/api/consolidated-scams/999/videos").status_code == 404

    def test_videos_for_group(
        self, client: TestClient, test_report, admin_auth_headers, db_session
    ):
        from services.consolidation_service import ConsolidationService

        group = ConsolidationService.get_group_for_report(db_session, test_report.id)
        client.post(
            "/api/scam-videos",
            json={
                "title": "Robocall warning",
                "description": "About this number",
                "youtubeUrl": "https://youtu.be/robo555",
                "consolidatedScamId": group.id,
            },
            headers=admin_auth_headers,
        )

        videos = client.get(f"/api/consolidated-scams/{group.id}/videos").json()

        assert [v["youtubeVideoId"] for v in videos] == ["robo555"]


class TestVerifyConsolidatedScam:
    def test_verify_then_reverify(
        self, client: TestClient, test_report, admin_auth_headers, db_session
    ):
        from services.consolidation_service import ConsolidationService

        group = ConsolidationService.get_group_for_report(db_session, test_report.id)

        first = client.post(
            f"/api/consolidated-scams/{group.id}/verify", headers=admin_auth_headers
        )
        second = client.post(
            f"/api/consolidated-scams/{group.id}/verify", headers=admin_auth_headers
        )

        assert first.json()["message"] == "Consolidated scam verified successfully"
        assert first.json()["consolidatedScam"]["isVerified"] is True
        assert second.json()["message"] == "Consolidated scam was already verified"

    def test_verify_requires_admin(self, client: TestClient, test_report, auth_headers, db_session):
        from services.consolidation_service import ConsolidationService

        group = ConsolidationService.get_group_for_report(db_session, test_report.id)

        response = client.post(
            f"/api/consolidated-scams/{group.id}/verify", headers=auth_headers
        )

        assert response.status_code == 403


class TestRebuild:
    def test_dry_run_and_real_rebuild(
        self, client: TestClient, create_report, other_user, admin_auth_headers
    ):
        create_report()
        create_report(reporter=other_user)

        dry = client.post(
            "/api/consolidated-scams/rebuild?dryRun=true", headers=admin_auth_headers
        )
        assert dry.status_code == 200
        assert dry.json()["dryRun"] is True
        assert dry.json()["reportsReplayed"] == 2
        assert dry.json()["groupsCreated"] == 1

        real = client.post("/api/consolidated-scams/rebuild", headers=admin_auth_headers)
        assert real.json()["dryRun"] is False
        assert real.json()["linksCreated"] == 2

        groups = client.get("/api/consolidated-scams").json()
        assert [g["reportCount"] for g in groups] == [2]

    def test_rebuild_requires_admin(self, client: TestClient, auth_headers):
        response = client.post("/api/consolidated-scams/rebuild", headers=auth_headers)
        assert response.status_code == 403
