"""
Comments on scam reports.

Comments are immutable once posted. Anyone signed in may comment on a report
they are allowed to read.
"""

from loguru import logger
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import ValidationException
from repositories.scam_comment_repository import ScamCommentRepository
from services.scam_report_service import ScamReportService


class ScamCommentService:
    """Service for scam report comments."""

    @staticmethod
    def create_comment(
        db: Session, data: schemas.ScamCommentCreate, author: db_models.User
    ) -> schemas.ScamCommentResponse:
        """
        Post a comment on a report.

        Args:
            db: Database session
            data: Target report and comment text
            author: Authenticated commenter

        Returns:
            The comment with its author's display info

        Raises:
            ValidationException: If the content is blank
            ScamReportNotFoundException: If the report doesn't exist
            ReportNotAvailableException: If the report is hidden from the author
        """
        content = data.content.strip()
        if not content:
            raise ValidationException("Comment content cannot be empty", ["content"])

        report = ScamReportService.get_visible_report(db, data.scam_report_id, author)

        comment = ScamCommentRepository(db).create(
            db_models.ScamComment(
                scam_report_id=report.id,
                user_id=author.id,
                content=content,
            )
        )
        logger.info(f"User {author.id} commented on scam report {report.id}")

        response = schemas.ScamCommentResponse.model_validate(comment)
        response.user = schemas.CommentAuthor(
            id=author.id,
            username=author.username,
            display_name=author.display_name,
            email=author.email,
        )
        return response
