from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import PaginationLimitSmall
from repositories.database import get_db
from services import ScamVideoService

router = APIRouter(prefix="/scam-videos", tags=["scam-videos"])


@router.get("", response_model=List[schemas.ScamVideoResponse])
def list_scam_videos(db: Session = Depends(get_db)):
    return ScamVideoService.list_videos(db)


@router.get("/featured", response_model=List[schemas.ScamVideoResponse])
def list_featured_scam_videos(
    limit: PaginationLimitSmall = 5, db: Session = Depends(get_db)
):
    return ScamVideoService.list_featured(db, limit)


@router.get("/type/{scam_type}", response_model=List[schemas.ScamVideoResponse])
def list_scam_videos_by_type(
    scam_type: db_models.ScamType, db: Session = Depends(get_db)
):
    return ScamVideoService.list_by_type(db, scam_type)


@router.get("/{video_id}", response_model=schemas.ScamVideoResponse)
def get_scam_video(video_id: int, db: Session = Depends(get_db)):
    return ScamVideoService.get_video(db, video_id)


@router.post(
    "",
    response_model=schemas.ScamVideoResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_scam_video(
    video: schemas.ScamVideoCreate,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    """Add a video. youtubeVideoId is derived from youtubeUrl when omitted."""
    return ScamVideoService.create_video(db, video, admin)


@router.patch("/{video_id}", response_model=schemas.ScamVideoResponse)
def update_scam_video(
    video_id: int,
    changes: schemas.ScamVideoUpdate,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    return ScamVideoService.update_video(db, video_id, changes)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_scam_video(
    video_id: int,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
) -> Response:
    ScamVideoService.delete_video(db, video_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
