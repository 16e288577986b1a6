"""
Scam comment repository.
"""

from typing import List

from sqlalchemy.orm import Session, joinedload

import repositories.db_models as db_models
from .base import BaseRepository


class ScamCommentRepository(BaseRepository[db_models.ScamComment]):
    """Repository for ScamComment entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.ScamComment, db)

    def get_for_report(self, scam_report_id: int) -> List[db_models.ScamComment]:
        """Comments on a report with their authors, oldest first."""
        return (
            self.db.query(db_models.ScamComment)
            .options(joinedload(db_models.ScamComment.author))
            .filter(db_models.ScamComment.scam_report_id == scam_report_id)
            .order_by(db_models.ScamComment.created_at, db_models.ScamComment.id)
            .all()
        )
