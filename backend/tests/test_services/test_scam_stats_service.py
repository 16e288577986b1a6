"""Tests for ScamStatsService."""

import repositories.db_models as db_models
from models.config import settings
from repositories.scam_stats_repository import ScamStatsRepository
from services.scam_report_service import ScamReportService
from services.scam_stats_service import ScamStatsService


class TestScamStatsService:
    """Snapshot computation and retention."""

    def test_get_latest_computes_when_empty(self, db_session):
        snapshot = ScamStatsService.get_latest(db_session)

        assert snapshot.id is not None
        assert snapshot.scope == db_models.StatsScope.PUBLISHED
        assert snapshot.total_reports == 0

    def test_scopes_differ_for_unpublished(self, db_session, create_report, admin_user):
        create_report()
        hidden = create_report("email", "fraud@example.com")
        ScamReportService.set_published(db_session, hidden.id, admin_user, False)

        published = ScamStatsService.get_latest(db_session, published_only=True)
        everything = ScamStatsService.get_latest(db_session, published_only=False)

        assert published.total_reports == 1
        assert published.email_scams == 0
        assert everything.total_reports == 2
        assert everything.email_scams == 1

    def test_verification_counted(self, db_session, test_report, admin_user):
        ScamReportService.verify_report(db_session, test_report.id, admin_user)

        assert ScamStatsService.get_latest(db_session).verified_reports == 1

    def test_refresh_appends_both_scopes(self, db_session):
        published, everything = ScamStatsService.refresh(db_session)
        db_session.commit()

        assert published.scope == db_models.StatsScope.PUBLISHED
        assert everything.scope == db_models.StatsScope.ALL
        assert published.id != everything.id

    def test_snapshots_pruned_to_retention(self, db_session, monkeypatch):
        monkeypatch.setattr(settings, "STATS_SNAPSHOT_RETENTION", 3)

        for _ in range(6):
            ScamStatsService.refresh(db_session)
        db_session.commit()

        repo = ScamStatsRepository(db_session)
        assert repo.count_for_scope(db_models.StatsScope.PUBLISHED) == 3
        assert repo.count_for_scope(db_models.StatsScope.ALL) == 3
