from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import InsufficientPermissionsException
from repositories.database import get_db
from services import ScamStatsService

router = APIRouter(prefix="/scam-stats", tags=["scam-stats"])


@router.get("", response_model=schemas.ScamStatResponse)
def get_scam_stats(
    scope: db_models.StatsScope = db_models.StatsScope.PUBLISHED,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    """
    Latest statistics snapshot.

    Counts cover published reports; admins may ask for scope=all to include
    unpublished ones.
    """
    if scope == db_models.StatsScope.ALL and (
        current_user is None or not current_user.is_admin
    ):
        raise InsufficientPermissionsException("Admin privileges required")
    return ScamStatsService.get_latest(
        db, published_only=scope == db_models.StatsScope.PUBLISHED
    )
