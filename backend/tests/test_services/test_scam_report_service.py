"""Tests for ScamReportService: submission, lifecycle and listing."""

from datetime import date

import pytest

import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import (
    MissingFieldsException,
    ReportNotAvailableException,
    ScamReportNotFoundException,
    ValidationException,
)
from repositories.scam_comment_repository import ScamCommentRepository
from services.consolidation_service import ConsolidationService
from services.scam_report_service import ScamReportService


class TestValidateSubmission:
    """Submission checks before anything is written."""

    def test_reports_all_missing_fields(self):
        with pytest.raises(MissingFieldsException) as exc_info:
            ScamReportService.validate_submission(schemas.ScamReportCreate())

        assert exc_info.value.fields == ["scamType", "description", "incidentDate"]

    def test_blank_description_counts_as_missing(self, report_payload):
        data = schemas.ScamReportCreate(**report_payload(description="   "))

        with pytest.raises(MissingFieldsException) as exc_info:
            ScamReportService.validate_submission(data)

        assert exc_info.value.fields == ["description"]

    def test_unknown_scam_type(self, report_payload):
        data = schemas.ScamReportCreate(**report_payload(scam_type="phone"))
        data.scam_type = "sms"

        with pytest.raises(ValidationException) as exc_info:
            ScamReportService.validate_submission(data)

        assert exc_info.value.fields == ["scamType"]

    def test_bad_incident_date(self, report_payload):
        data = schemas.ScamReportCreate(**report_payload(incident_date="last week"))

        with pytest.raises(ValidationException) as exc_info:
            ScamReportService.validate_submission(data)

        assert exc_info.value.fields == ["incidentDate"]

    def test_identifier_required_for_type(self):
        data = schemas.ScamReportCreate(
            scam_type="email", description="phishing", incident_date="2024-03-01"
        )

        with pytest.raises(ValidationException) as exc_info:
            ScamReportService.validate_submission(data)

        assert exc_info.value.fields == ["scamEmail"]

    def test_other_identifier_fields_rejected(self, report_payload):
        data = schemas.ScamReportCreate(
            **report_payload(scam_email="also@example.com")
        )

        with pytest.raises(ValidationException) as exc_info:
            ScamReportService.validate_submission(data)

        assert exc_info.value.fields == ["scamEmail"]

    def test_invalid_scam_email(self, report_payload):
        data = schemas.ScamReportCreate(**report_payload("email", "not-an-email"))

        with pytest.raises(ValidationException) as exc_info:
            ScamReportService.validate_submission(data)

        assert exc_info.value.fields == ["scamEmail"]

    def test_defaults_and_trimming(self, report_payload):
        data = schemas.ScamReportCreate(
            **report_payload(
                identifier=" 555-0100 ",
                incident_date="2024-03-01T10:00:00Z",
                city="  ",
            )
        )

        values = ScamReportService.validate_submission(data)

        assert values["scam_type"] == db_models.ScamType.PHONE
        assert values["scam_phone_number"] == "555-0100"
        assert values["incident_date"] == date(2024, 3, 1)
        assert values["country"] == "USA"
        assert values["city"] is None


class TestCreateReport:
    """Persisting a submission."""

    def test_defaults(self, test_report, test_user):
        assert test_report.id is not None
        assert test_report.user_id == test_user.id
        assert test_report.is_verified is False
        assert test_report.verified_at is None
        assert test_report.is_published is True
        assert test_report.published_by is None
        assert test_report.has_proof_document is False

    def test_proof_metadata_stored(self, create_report):
        proof = schemas.ProofFileMetadata(
            path="abc123.pdf", name="receipt.pdf", content_type="application/pdf", size=42
        )

        report = create_report(proof=proof)

        assert report.has_proof_document is True
        assert report.proof_file_path == "abc123.pdf"
        assert report.proof_file_name == "receipt.pdf"
        assert report.proof_file_type == "application/pdf"
        assert report.proof_file_size == 42

    def test_invalid_submission_writes_nothing(self, db_session, create_report):
        with pytest.raises(ValidationException):
            create_report(identifier="")

        assert db_session.query(db_models.ScamReport).count() == 0
        assert db_session.query(db_models.ConsolidatedScam).count() == 0

    def test_statistics_refreshed(self, db_session, create_report):
        create_report()
        create_report("business", "Acme Refunds")

        latest = (
            db_session.query(db_models.ScamStat)
            .filter(db_models.ScamStat.scope == db_models.StatsScope.PUBLISHED)
            .order_by(db_models.ScamStat.id.desc())
            .first()
        )

        assert latest.total_reports == 2
        assert latest.phone_scams == 1
        assert latest.business_scams == 1


class TestVerifyReport:
    """Verification is one way and propagates to the group."""

    def test_verify_sets_fields(self, db_session, test_report, admin_user):
        report, already = ScamReportService.verify_report(
            db_session, test_report.id, admin_user
        )

        assert already is False
        assert report.is_verified is True
        assert report.verified_by == admin_user.id
        assert report.verified_at is not None

    def test_verify_propagates_to_group(self, db_session, create_report, admin_user):
        first = create_report(identifier="555-0100")
        create_report(identifier="555-0100")
        unrelated = create_report(identifier="555-0199")

        ScamReportService.verify_report(db_session, first.id, admin_user)

        assert ConsolidationService.get_group_for_report(db_session, first.id).is_verified
        assert not ConsolidationService.get_group_for_report(
            db_session, unrelated.id
        ).is_verified

    def test_verify_is_idempotent(self, db_session, test_report, admin_user, other_user):
        first, _ = ScamReportService.verify_report(db_session, test_report.id, admin_user)
        verified_at = first.verified_at

        again, already = ScamReportService.verify_report(
            db_session, test_report.id, other_user
        )

        assert already is True
        assert again.verified_by == admin_user.id
        assert again.verified_at == verified_at

    def test_unpublish_does_not_unverify_group(
        self, db_session, test_report, admin_user
    ):
        ScamReportService.verify_report(db_session, test_report.id, admin_user)
        ScamReportService.set_published(
            db_session, test_report.id, admin_user, published=False
        )

        group = ConsolidationService.get_group_for_report(db_session, test_report.id)
        assert group.is_verified is True

    def test_verify_missing_report(self, db_session, admin_user):
        with pytest.raises(ScamReportNotFoundException):
            ScamReportService.verify_report(db_session, 999, admin_user)


class TestPublication:
    """Publish and unpublish."""

    def test_unpublish_records_actor(self, db_session, test_report, admin_user):
        report = ScamReportService.set_published(
            db_session, test_report.id, admin_user, published=False
        )

        assert report.is_published is False
        assert report.published_by == admin_user.id
        assert report.published_at is not None

    def test_publish_again(self, db_session, test_report, admin_user):
        ScamReportService.set_published(db_session, test_report.id, admin_user, False)
        report = ScamReportService.set_published(
            db_session, test_report.id, admin_user, True
        )

        assert report.is_published is True

    def test_unpublished_hidden_from_public(
        self, db_session, test_report, admin_user, other_user
    ):
        ScamReportService.set_published(db_session, test_report.id, admin_user, False)

        with pytest.raises(ReportNotAvailableException):
            ScamReportService.get_visible_report(db_session, test_report.id, None)
        with pytest.raises(ReportNotAvailableException):
            ScamReportService.get_visible_report(db_session, test_report.id, other_user)

    def test_unpublished_visible_to_admin_and_reporter(
        self, db_session, test_report, admin_user, test_user
    ):
        ScamReportService.set_published(db_session, test_report.id, admin_user, False)

        assert ScamReportService.get_visible_report(
            db_session, test_report.id, admin_user
        ).id == test_report.id
        assert ScamReportService.get_visible_report(
            db_session, test_report.id, test_user
        ).id == test_report.id

    def test_published_and_unpublished_lists(self, db_session, create_report, admin_user):
        shown = create_report(identifier="555-0100")
        hidden = create_report(identifier="555-0199")
        ScamReportService.set_published(db_session, hidden.id, admin_user, False)

        assert [r.id for r in ScamReportService.get_published_reports(db_session)] == [shown.id]
        assert [r.id for r in ScamReportService.get_unpublished_reports(db_session)] == [hidden.id]


class TestListReports:
    """Paginated listing."""

    def test_pagination_totals(self, db_session, create_report):
        for _ in range(5):
            create_report()

        page = ScamReportService.list_reports(
            db_session, schemas.ScamReportFilters(), None, page=2, limit=2
        )

        assert len(page.reports) == 2
        assert page.pagination.total_count == 5
        assert page.pagination.total_pages == 3

    def test_page_past_end_is_empty(self, db_session, create_report):
        for _ in range(3):
            create_report()

        page = ScamReportService.list_reports(
            db_session, schemas.ScamReportFilters(), None, page=10, limit=2
        )

        assert page.reports == []
        assert page.pagination.total_pages == 2
        assert page.pagination.total_count == 3

    def test_empty_listing(self, db_session):
        page = ScamReportService.list_reports(db_session, schemas.ScamReportFilters(), None)

        assert page.reports == []
        assert page.pagination.total_pages == 0

    def test_role_filtering(self, db_session, create_report, admin_user):
        create_report()
        hidden = create_report()
        ScamReportService.set_published(db_session, hidden.id, admin_user, False)

        public = ScamReportService.list_reports(db_session, schemas.ScamReportFilters(), None)
        admin = ScamReportService.list_reports(
            db_session, schemas.ScamReportFilters(), admin_user
        )

        assert public.pagination.total_count == 1
        assert admin.pagination.total_count == 2

    def test_reporter_info_attached(self, db_session, test_report, test_user):
        page = ScamReportService.list_reports(db_session, schemas.ScamReportFilters(), None)

        assert page.reports[0].user.display_name == test_user.display_name

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
    def test_out_of_range_arguments(self, db_session, page, limit):
        with pytest.raises(ValidationException):
            ScamReportService.list_reports(
                db_session, schemas.ScamReportFilters(), None, page=page, limit=limit
            )

    def test_recent_reports_carry_group(self, db_session, create_report):
        create_report(identifier="555-0100")
        create_report(identifier="555-0100")

        recent = ScamReportService.get_recent_reports(db_session, None, limit=1)

        assert len(recent) == 1
        assert recent[0].consolidated_info.report_count == 2


class TestReportDetail:
    """Detail view with comments."""

    def test_comment_identity_hidden_from_public(
        self, db_session, test_report, other_user, admin_user
    ):
        ScamCommentRepository(db_session).create(
            db_models.ScamComment(
                scam_report_id=test_report.id, user_id=other_user.id, content="Same here"
            )
        )

        public = ScamReportService.get_report_detail(db_session, test_report.id, None)
        admin = ScamReportService.get_report_detail(db_session, test_report.id, admin_user)

        assert public.comments[0].user.username == other_user.username
        assert public.comments[0].user.email is None
        assert public.comments[0].user.display_name is None
        assert admin.comments[0].user.email == other_user.email
        assert public.consolidated_info.identifier == "555-0100"
