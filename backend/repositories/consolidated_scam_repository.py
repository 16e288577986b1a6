"""
Repositories for consolidated scams and their report links.
"""

from typing import List, Optional

from sqlalchemy import exists
from sqlalchemy.orm import Query, Session

import repositories.db_models as db_models
from .base import BaseRepository
from .scam_report_repository import published_condition


def _has_published_report():
    """Correlated EXISTS: the group links at least one publicly visible report."""
    link = db_models.ScamReportConsolidation
    return exists().where(
        link.consolidated_scam_id == db_models.ConsolidatedScam.id,
        link.scam_report_id == db_models.ScamReport.id,
        published_condition(),
    )


class ConsolidatedScamRepository(BaseRepository[db_models.ConsolidatedScam]):
    """Repository for ConsolidatedScam entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.ConsolidatedScam, db)

    def get_by_identifier(
        self, identifier: str, for_update: bool = False
    ) -> Optional[db_models.ConsolidatedScam]:
        """
        Get a group by its exact identifier.

        Args:
            identifier: Identifier as stored, compared byte for byte
            for_update: Lock the row until the transaction ends and reload it
                from the database, discarding any cached state

        Returns:
            ConsolidatedScam if found, None otherwise
        """
        query = self.db.query(db_models.ConsolidatedScam).filter(
            db_models.ConsolidatedScam.identifier == identifier
        )
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.first()

    def _groups(self, published_only: bool) -> Query:
        query = self.db.query(db_models.ConsolidatedScam)
        if published_only:
            query = query.filter(_has_published_report())
        return query

    def has_published_report(self, consolidated_scam_id: int) -> bool:
        return (
            self._groups(published_only=True)
            .filter(db_models.ConsolidatedScam.id == consolidated_scam_id)
            .first()
            is not None
        )

    def list_all(self, published_only: bool = False) -> List[db_models.ConsolidatedScam]:
        """
        Most reported first, then most recently reported.

        With published_only, groups whose reports are all unpublished are left
        out.
        """
        return (
            self._groups(published_only)
            .order_by(
                db_models.ConsolidatedScam.report_count.desc(),
                db_models.ConsolidatedScam.last_reported_at.desc(),
                db_models.ConsolidatedScam.id.desc(),
            )
            .all()
        )

    def list_by_type(
        self, scam_type: db_models.ScamType, published_only: bool = False
    ) -> List[db_models.ConsolidatedScam]:
        return (
            self._groups(published_only)
            .filter(db_models.ConsolidatedScam.scam_type == scam_type)
            .order_by(
                db_models.ConsolidatedScam.report_count.desc(),
                db_models.ConsolidatedScam.id.desc(),
            )
            .all()
        )

    def delete_all(self) -> int:
        """
        Delete every group and flush, without committing.

        Goes through the session so the identity map forgets the rows.
        Returns rows deleted.
        """
        groups = self.db.query(db_models.ConsolidatedScam).all()
        for group in groups:
            self.db.delete(group)
        self.db.flush()
        return len(groups)


class ScamReportConsolidationRepository(
    BaseRepository[db_models.ScamReportConsolidation]
):
    """Repository for report-to-group link rows."""

    def __init__(self, db: Session):
        super().__init__(db_models.ScamReportConsolidation, db)

    def get_by_report_id(
        self, scam_report_id: int
    ) -> Optional[db_models.ScamReportConsolidation]:
        return (
            self.db.query(db_models.ScamReportConsolidation)
            .filter(db_models.ScamReportConsolidation.scam_report_id == scam_report_id)
            .first()
        )

    def count_for_group(self, consolidated_scam_id: int) -> int:
        return (
            self.db.query(db_models.ScamReportConsolidation)
            .filter(
                db_models.ScamReportConsolidation.consolidated_scam_id
                == consolidated_scam_id
            )
            .count()
        )

    def delete_all(self) -> int:
        """Delete every link and flush, without committing. Returns rows deleted."""
        links = self.db.query(db_models.ScamReportConsolidation).all()
        for link in links:
            self.db.delete(link)
        self.db.flush()
        return len(links)
