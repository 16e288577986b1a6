"""Tests for ScamCommentService."""

import pytest

import models.schemas as schemas
from models.exceptions import (
    ReportNotAvailableException,
    ScamReportNotFoundException,
    ValidationException,
)
from services.scam_comment_service import ScamCommentService
from services.scam_report_service import ScamReportService


class TestCreateComment:
    """Posting comments."""

    def test_create_comment(self, db_session, test_report, other_user):
        comment = ScamCommentService.create_comment(
            db_session,
            schemas.ScamCommentCreate(scam_report_id=test_report.id, content="  Me too  "),
            other_user,
        )

        assert comment.id is not None
        assert comment.content == "Me too"
        assert comment.user_id == other_user.id
        assert comment.user.username == other_user.username

    def test_whitespace_only_rejected(self, db_session, test_report, other_user):
        with pytest.raises(ValidationException) as exc_info:
            ScamCommentService.create_comment(
                db_session,
                schemas.ScamCommentCreate(scam_report_id=test_report.id, content="   "),
                other_user,
            )

        assert exc_info.value.fields == ["content"]

    def test_missing_report(self, db_session, other_user):
        with pytest.raises(ScamReportNotFoundException):
            ScamCommentService.create_comment(
                db_session,
                schemas.ScamCommentCreate(scam_report_id=999, content="hello"),
                other_user,
            )

    def test_hidden_report_rejected(self, db_session, test_report, admin_user, other_user):
        ScamReportService.set_published(db_session, test_report.id, admin_user, False)

        with pytest.raises(ReportNotAvailableException):
            ScamCommentService.create_comment(
                db_session,
                schemas.ScamCommentCreate(scam_report_id=test_report.id, content="hi"),
                other_user,
            )
