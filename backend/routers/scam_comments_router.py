from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import ScamCommentService

router = APIRouter(prefix="/scam-comments", tags=["scam-comments"])


@router.post(
    "",
    response_model=schemas.ScamCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_scam_comment(
    comment: schemas.ScamCommentCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    """Comment on a report the caller can see."""
    return ScamCommentService.create_comment(db, comment, current_user)
