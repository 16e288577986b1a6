"""
Educational scam videos curated by admins.
"""

from typing import List, Optional
from urllib.parse import parse_qs, urlparse

from loguru import logger
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import ScamVideoNotFoundException, ValidationException
from repositories.scam_video_repository import ScamVideoRepository
from services.consolidation_service import ConsolidationService


def extract_youtube_id(url: str) -> Optional[str]:
    """
    Pull the video ID out of a YouTube URL.

    Handles `youtube.com/watch?v=<id>` and `youtu.be/<id>` links. Returns
    None for anything else.
    """
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None

    host = (parsed.hostname or "").lower()
    if host.endswith("youtube.com"):
        video_id = parse_qs(parsed.query).get("v", [""])[0]
    elif host.endswith("youtu.be"):
        video_id = parsed.path.lstrip("/").split("/")[0]
    else:
        return None

    return video_id or None


class ScamVideoService:
    """Service for scam education videos."""

    @staticmethod
    def list_videos(db: Session) -> List[db_models.ScamVideo]:
        return ScamVideoRepository(db).list_videos()

    @staticmethod
    def list_featured(db: Session, limit: int = 5) -> List[db_models.ScamVideo]:
        return ScamVideoRepository(db).list_featured(limit)

    @staticmethod
    def list_by_type(
        db: Session, scam_type: db_models.ScamType
    ) -> List[db_models.ScamVideo]:
        return ScamVideoRepository(db).list_by_type(scam_type)

    @staticmethod
    def list_for_consolidated_scam(
        db: Session, consolidated_scam_id: int
    ) -> List[db_models.ScamVideo]:
        return ScamVideoRepository(db).list_for_consolidated_scam(consolidated_scam_id)

    @staticmethod
    def get_video(db: Session, video_id: int) -> db_models.ScamVideo:
        """
        Raises:
            ScamVideoNotFoundException: If the video doesn't exist
        """
        video = ScamVideoRepository(db).get_by_id(video_id)
        if video is None:
            raise ScamVideoNotFoundException("Scam video not found")
        return video

    @staticmethod
    def create_video(
        db: Session, data: schemas.ScamVideoCreate, admin: db_models.User
    ) -> db_models.ScamVideo:
        """
        Add a video. The YouTube ID is derived from the URL when not given.

        Raises:
            ValidationException: If no video ID can be derived
            ConsolidatedScamNotFoundException: If the linked group doesn't exist
        """
        values = data.model_dump()
        values["youtube_video_id"] = (values.get("youtube_video_id") or "").strip() or (
            extract_youtube_id(data.youtube_url)
        )
        if not values["youtube_video_id"]:
            raise ValidationException(
                "Could not extract YouTube video ID from URL. Please provide a valid "
                "YouTube URL or specify the video ID directly.",
                ["youtubeUrl"],
            )
        if data.consolidated_scam_id is not None:
            ConsolidationService.get_consolidated_scam(db, data.consolidated_scam_id)

        values["featured"] = bool(values.get("featured"))
        video = ScamVideoRepository(db).create(
            db_models.ScamVideo(added_by_id=admin.id, **values)
        )
        logger.info(f"Scam video {video.id} added by admin {admin.id}")
        return video

    @staticmethod
    def update_video(
        db: Session, video_id: int, data: schemas.ScamVideoUpdate
    ) -> db_models.ScamVideo:
        video = ScamVideoService.get_video(db, video_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("consolidated_scam_id") is not None:
            ConsolidationService.get_consolidated_scam(db, changes["consolidated_scam_id"])
        if "youtube_url" in changes and not changes.get("youtube_video_id"):
            derived = extract_youtube_id(changes["youtube_url"])
            if derived:
                changes["youtube_video_id"] = derived
        if "youtube_video_id" in changes and not changes["youtube_video_id"]:
            changes.pop("youtube_video_id")

        for field, value in changes.items():
            setattr(video, field, value)
        return ScamVideoRepository(db).update(video)

    @staticmethod
    def delete_video(db: Session, video_id: int) -> None:
        video = ScamVideoService.get_video(db, video_id)
        ScamVideoRepository(db).delete(video)
        logger.info(f"Scam video {video_id} deleted")
