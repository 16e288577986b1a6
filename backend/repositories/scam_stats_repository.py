"""
Statistics snapshot repository.

Snapshots form an append-only log per scope, trimmed to a fixed number of
rows after every append.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class ScamStatsRepository(BaseRepository[db_models.ScamStat]):
    """Repository for ScamStat snapshot rows."""

    def __init__(self, db: Session):
        super().__init__(db_models.ScamStat, db)

    def get_latest(self, scope: db_models.StatsScope) -> Optional[db_models.ScamStat]:
        """Newest snapshot for a scope. IDs are monotonic, dates may tie."""
        return (
            self.db.query(db_models.ScamStat)
            .filter(db_models.ScamStat.scope == scope)
            .order_by(db_models.ScamStat.id.desc())
            .first()
        )

    def list_for_scope(
        self, scope: db_models.StatsScope, limit: int = 100
    ) -> List[db_models.ScamStat]:
        return (
            self.db.query(db_models.ScamStat)
            .filter(db_models.ScamStat.scope == scope)
            .order_by(db_models.ScamStat.id.desc())
            .limit(limit)
            .all()
        )

    def count_for_scope(self, scope: db_models.StatsScope) -> int:
        return (
            self.db.query(db_models.ScamStat)
            .filter(db_models.ScamStat.scope == scope)
            .count()
        )

    def prune(self, scope: db_models.StatsScope, keep: int) -> int:
        """
        Delete all but the newest `keep` snapshots of a scope.

        Args:
            scope: Snapshot scope to trim
            keep: Number of newest rows to retain

        Returns:
            Number of rows deleted (not committed)
        """
        cutoff = (
            self.db.query(db_models.ScamStat.id)
            .filter(db_models.ScamStat.scope == scope)
            .order_by(db_models.ScamStat.id.desc())
            .offset(keep - 1)
            .limit(1)
            .scalar()
        )
        if cutoff is None:
            return 0

        return (
            self.db.query(db_models.ScamStat)
            .filter(
                db_models.ScamStat.scope == scope,
                db_models.ScamStat.id < cutoff,
            )
            .delete(synchronize_session=False)
        )
