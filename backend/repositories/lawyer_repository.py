"""
Lawyer profile and lawyer request repositories.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class LawyerProfileRepository(BaseRepository[db_models.LawyerProfile]):
    """Repository for LawyerProfile entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.LawyerProfile, db)

    def get_by_user_id(self, user_id: int) -> Optional[db_models.LawyerProfile]:
        return (
            self.db.query(db_models.LawyerProfile)
            .filter(db_models.LawyerProfile.user_id == user_id)
            .first()
        )

    def list_profiles(self, verified_only: bool) -> List[db_models.LawyerProfile]:
        query = self.db.query(db_models.LawyerProfile)
        if verified_only:
            query = query.filter(
                db_models.LawyerProfile.verification_status
                == db_models.VerificationStatus.VERIFIED
            )
        return query.order_by(db_models.LawyerProfile.id).all()


class LawyerRequestRepository(BaseRepository[db_models.LawyerRequest]):
    """Repository for LawyerRequest entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.LawyerRequest, db)

    def list_requests(
        self, status: Optional[db_models.RequestStatus] = None
    ) -> List[db_models.LawyerRequest]:
        """Requests newest first, optionally restricted to one status."""
        query = self.db.query(db_models.LawyerRequest)
        if status is not None:
            query = query.filter(db_models.LawyerRequest.status == status)
        return query.order_by(
            db_models.LawyerRequest.created_at.desc(), db_models.LawyerRequest.id.desc()
        ).all()

    def list_for_lawyer(self, lawyer_profile_id: int) -> List[db_models.LawyerRequest]:
        return (
            self.db.query(db_models.LawyerRequest)
            .filter(db_models.LawyerRequest.lawyer_profile_id == lawyer_profile_id)
            .order_by(
                db_models.LawyerRequest.created_at.desc(),
                db_models.LawyerRequest.id.desc(),
            )
            .all()
        )
