"""Tests for ConsolidatedScamRepository and ScamReportConsolidationRepository."""

from datetime import datetime, timezone

from sqlalchemy import text

import repositories.db_models as db_models
from repositories.consolidated_scam_repository import (
    ConsolidatedScamRepository,
    ScamReportConsolidationRepository,
)


def _group(db_session, identifier: str, count: int = 1, scam_type=db_models.ScamType.PHONE):
    now = datetime(2024, 3, 1, tzinfo=timezone.utc)
    group = db_models.ConsolidatedScam(
        scam_type=scam_type,
        identifier=identifier,
        report_count=count,
        first_reported_at=now,
        last_reported_at=now,
    )
    db_session.add(group)
    db_session.commit()
    db_session.refresh(group)
    return group


class TestConsolidatedScamRepository:
    """Test cases for group lookups."""

    def test_identifier_match_is_exact(self, db_session):
        """Identifiers are compared as stored, including case and spacing."""
        _group(db_session, "Acme Refunds", scam_type=db_models.ScamType.BUSINESS)
        repo = ConsolidatedScamRepository(db_session)

        assert repo.get_by_identifier("Acme Refunds") is not None
        assert repo.get_by_identifier("acme refunds") is None
        assert repo.get_by_identifier("Acme  Refunds") is None

    def test_locked_lookup_reloads_row(self, db_session):
        group = _group(db_session, "555-0100")
        repo = ConsolidatedScamRepository(db_session)
        assert repo.get_by_identifier("555-0100").report_count == 1

        db_session.execute(
            text("UPDATE consolidated_scams SET report_count = 4 WHERE id = :id"),
            {"id": group.id},
        )

        assert repo.get_by_identifier("555-0100").report_count == 1
        assert repo.get_by_identifier("555-0100", for_update=True).report_count == 4

    def test_published_only_needs_a_visible_report(
        self, db_session, create_report, admin_user
    ):
        from services.scam_report_service import ScamReportService

        create_report(identifier="555-0100")
        hidden = create_report(identifier="555-0199")
        ScamReportService.set_published(db_session, hidden.id, admin_user, False)
        _group(db_session, "555-0123")
        repo = ConsolidatedScamRepository(db_session)

        public = repo.list_all(published_only=True)
        phone = repo.list_by_type(db_models.ScamType.PHONE, published_only=True)

        assert [g.identifier for g in public] == ["555-0100"]
        assert [g.identifier for g in phone] == ["555-0100"]
        assert len(repo.list_all()) == 3
        assert repo.has_published_report(public[0].id)
        assert not repo.has_published_report(
            repo.get_by_identifier("555-0199").id
        )

    def test_list_all_most_reported_first(self, db_session):
        small = _group(db_session, "555-0100", count=1)
        large = _group(db_session, "555-0199", count=4)

        groups = ConsolidatedScamRepository(db_session).list_all()

        assert [g.id for g in groups] == [large.id, small.id]

    def test_list_by_type(self, db_session):
        _group(db_session, "555-0100")
        email_group = _group(
            db_session, "fraud@example.com", scam_type=db_models.ScamType.EMAIL
        )

        groups = ConsolidatedScamRepository(db_session).list_by_type(
            db_models.ScamType.EMAIL
        )

        assert [g.id for g in groups] == [email_group.id]


class TestScamReportConsolidationRepository:
    """Test cases for report links."""

    def test_links_and_counts(self, db_session, test_report):
        link_repo = ScamReportConsolidationRepository(db_session)

        link = link_repo.get_by_report_id(test_report.id)

        assert link is not None
        assert link_repo.count_for_group(link.consolidated_scam_id) == 1

    def test_delete_all(self, db_session, test_report):
        link_repo = ScamReportConsolidationRepository(db_session)

        deleted = link_repo.delete_all()
        db_session.commit()

        assert deleted == 1
        assert link_repo.get_by_report_id(test_report.id) is None
