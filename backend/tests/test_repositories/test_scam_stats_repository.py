"""Tests for ScamStatsRepository."""

import repositories.db_models as db_models
from repositories.scam_stats_repository import ScamStatsRepository


def _snapshot(db_session, scope, total: int) -> db_models.ScamStat:
    stat = db_models.ScamStat(scope=scope, total_reports=total)
    db_session.add(stat)
    db_session.commit()
    db_session.refresh(stat)
    return stat


class TestScamStatsRepository:
    """Test cases for snapshot storage."""

    def test_get_latest_per_scope(self, db_session):
        _snapshot(db_session, db_models.StatsScope.PUBLISHED, 1)
        latest_published = _snapshot(db_session, db_models.StatsScope.PUBLISHED, 2)
        latest_all = _snapshot(db_session, db_models.StatsScope.ALL, 5)
        repo = ScamStatsRepository(db_session)

        assert repo.get_latest(db_models.StatsScope.PUBLISHED).id == latest_published.id
        assert repo.get_latest(db_models.StatsScope.ALL).id == latest_all.id

    def test_get_latest_empty(self, db_session):
        assert ScamStatsRepository(db_session).get_latest(db_models.StatsScope.ALL) is None

    def test_prune_keeps_newest(self, db_session):
        snapshots = [
            _snapshot(db_session, db_models.StatsScope.PUBLISHED, n) for n in range(5)
        ]
        other_scope = _snapshot(db_session, db_models.StatsScope.ALL, 9)
        repo = ScamStatsRepository(db_session)

        deleted = repo.prune(db_models.StatsScope.PUBLISHED, keep=2)
        db_session.commit()

        assert deleted == 3
        remaining = repo.list_for_scope(db_models.StatsScope.PUBLISHED)
        assert {s.id for s in remaining} == {snapshots[3].id, snapshots[4].id}
        assert repo.get_latest(db_models.StatsScope.ALL).id == other_scope.id

    def test_prune_below_limit_is_noop(self, db_session):
        _snapshot(db_session, db_models.StatsScope.PUBLISHED, 1)

        assert ScamStatsRepository(db_session).prune(
            db_models.StatsScope.PUBLISHED, keep=10
        ) == 0
