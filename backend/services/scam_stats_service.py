"""
Statistics aggregation over scam reports.

Counts are recomputed from scratch on every refresh and appended as a new
snapshot row. Two scopes are kept side by side: "published" (what the
public sees) and "all" (admin view). Each scope is trimmed to the newest
STATS_SNAPSHOT_RETENTION rows.
"""

from loguru import logger
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from models.config import settings
from repositories.scam_report_repository import ScamReportRepository
from repositories.scam_stats_repository import ScamStatsRepository


def _scope_for(published_only: bool) -> db_models.StatsScope:
    return db_models.StatsScope.PUBLISHED if published_only else db_models.StatsScope.ALL


class ScamStatsService:
    """Service for statistics snapshots."""

    @staticmethod
    def recompute(db: Session, published_only: bool = True) -> db_models.ScamStat:
        """
        Count reports and append a snapshot row for one scope.

        The row is flushed but not committed, so it joins whatever
        transaction triggered the recomputation.

        Args:
            db: Database session
            published_only: Count only publicly visible reports

        Returns:
            The new snapshot row
        """
        scope = _scope_for(published_only)
        counts = ScamReportRepository(db).aggregate_counts(published_only)

        stats_repo = ScamStatsRepository(db)
        snapshot = stats_repo.add(db_models.ScamStat(scope=scope, **counts))
        pruned = stats_repo.prune(scope, settings.STATS_SNAPSHOT_RETENTION)

        logger.debug(
            f"Stats snapshot {snapshot.id} ({scope.value}): "
            f"{counts['total_reports']} reports, pruned {pruned}"
        )
        return snapshot

    @staticmethod
    def refresh(db: Session) -> tuple[db_models.ScamStat, db_models.ScamStat]:
        """
        Append a fresh snapshot for both scopes.

        Called after any report mutation. Does not commit.

        Returns:
            Tuple of (published snapshot, all-reports snapshot)
        """
        return (
            ScamStatsService.recompute(db, published_only=True),
            ScamStatsService.recompute(db, published_only=False),
        )

    @staticmethod
    def get_latest(db: Session, published_only: bool = True) -> db_models.ScamStat:
        """
        Newest snapshot for a scope, computing and saving one if none exists.
        """
        scope = _scope_for(published_only)
        latest = ScamStatsRepository(db).get_latest(scope)
        if latest is not None:
            return latest

        logger.info(f"No {scope.value} stats snapshot yet, computing one")
        snapshot = ScamStatsService.recompute(db, published_only)
        db.commit()
        db.refresh(snapshot)
        return snapshot
