from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import LawyerService, ScamReportService, UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[schemas.UserResponse])
def list_users(
    role: Optional[db_models.UserRole] = None,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    """All accounts, optionally filtered by role."""
    return UserService.list_users(db, role)


@router.get("/{user_id}/scam-reports", response_model=List[schemas.ScamReportResponse])
def get_user_scam_reports(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    """All of a user's reports, published or not. Self or admin only."""
    auth.require_self_or_admin(current_user, user_id)
    UserService.get_user_by_id_or_raise(db, user_id)
    return [
        ScamReportService.build_report_response(report)
        for report in ScamReportService.get_reports_for_user(db, user_id)
    ]


@router.get("/{user_id}/lawyer-profile", response_model=schemas.LawyerProfileResponse)
def get_user_lawyer_profile(user_id: int, db: Session = Depends(get_db)):
    return LawyerService.get_profile_for_user(db, user_id)
