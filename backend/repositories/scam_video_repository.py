"""
Scam education video repository.
"""

from typing import List

from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class ScamVideoRepository(BaseRepository[db_models.ScamVideo]):
    """Repository for ScamVideo entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.ScamVideo, db)

    def _newest_first(self):  # type: ignore[no-untyped-def]
        return self.db.query(db_models.ScamVideo).order_by(
            db_models.ScamVideo.added_at.desc(), db_models.ScamVideo.id.desc()
        )

    def list_videos(self) -> List[db_models.ScamVideo]:
        return self._newest_first().all()

    def list_featured(self, limit: int) -> List[db_models.ScamVideo]:
        return (
            self._newest_first()
            .filter(db_models.ScamVideo.featured.is_(True))
            .limit(limit)
            .all()
        )

    def list_by_type(self, scam_type: db_models.ScamType) -> List[db_models.ScamVideo]:
        return (
            self._newest_first()
            .filter(db_models.ScamVideo.scam_type == scam_type)
            .all()
        )

    def list_for_consolidated_scam(
        self, consolidated_scam_id: int
    ) -> List[db_models.ScamVideo]:
        return (
            self._newest_first()
            .filter(db_models.ScamVideo.consolidated_scam_id == consolidated_scam_id)
            .all()
        )

    def list_linked(self) -> List[db_models.ScamVideo]:
        """Videos attached to a consolidated scam."""
        return (
            self.db.query(db_models.ScamVideo)
            .filter(db_models.ScamVideo.consolidated_scam_id.isnot(None))
            .all()
        )
