"""
Scam report submission, lifecycle and listing.

Reports move along two independent axes: verified (one way, admin only)
and published (toggled by admins, defaults to published). Non-admin readers
only ever see published reports; a NULL published flag on legacy rows
counts as published.
"""

import math
from typing import List, Optional

from loguru import logger
from pydantic import EmailStr, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.time_utils import parse_incident_date, utc_now
from models.exceptions import (
    DomainException,
    MissingFieldsException,
    ReportNotAvailableException,
    ScamReportNotFoundException,
    StorageException,
    ValidationException,
)
from repositories.scam_comment_repository import ScamCommentRepository
from repositories.scam_report_repository import ScamReportRepository
from services.consolidation_service import ConsolidationService
from services.identifier_service import IDENTIFIER_FIELDS
from services.scam_stats_service import ScamStatsService

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
DEFAULT_COUNTRY = "USA"

# Whole-submission attempts when a concurrent submission creates the same group
SUBMISSION_ATTEMPTS = 2

_email_adapter = TypeAdapter(EmailStr)


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip a text field; blank becomes None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _is_admin(viewer: Optional[db_models.User]) -> bool:
    return viewer is not None and viewer.is_admin


def _is_visible(report: db_models.ScamReport) -> bool:
    return report.is_published is not False


class ScamReportService:
    """Service for scam report business logic."""

    @staticmethod
    def validate_submission(data: schemas.ScamReportCreate) -> dict:
        """
        Check a submission and turn it into ScamReport column values.

        Args:
            data: Raw submission

        Returns:
            Column values ready for a ScamReport

        Raises:
            MissingFieldsException: scamType, description or incidentDate absent
            ValidationException: Bad scam type, date, or identifier fields
        """
        scam_type_raw = _clean(data.scam_type)
        description = _clean(data.description)
        incident_date_raw = _clean(data.incident_date)

        missing = [
            to_camel(name)
            for name, value in (
                ("scam_type", scam_type_raw),
                ("description", description),
                ("incident_date", incident_date_raw),
            )
            if value is None
        ]
        if missing:
            raise MissingFieldsException(missing)

        try:
            scam_type = db_models.ScamType(scam_type_raw)
        except ValueError:
            raise ValidationException(
                "Invalid scam type. Expected phone, email or business", ["scamType"]
            )

        try:
            incident_date = parse_incident_date(incident_date_raw)  # type: ignore[arg-type]
        except ValueError:
            raise ValidationException("Invalid incident date format", ["incidentDate"])

        identifiers = {
            field_name: _clean(getattr(data, field_name))
            for field_name in IDENTIFIER_FIELDS.values()
        }
        expected_field = IDENTIFIER_FIELDS[scam_type]

        if identifiers[expected_field] is None:
            raise ValidationException(
                f"A {scam_type.value} scam report needs {to_camel(expected_field)}",
                [to_camel(expected_field)],
            )

        unexpected = [
            to_camel(name)
            for name, value in identifiers.items()
            if name != expected_field and value is not None
        ]
        if unexpected:
            raise ValidationException(
                f"Only {to_camel(expected_field)} may be set on a "
                f"{scam_type.value} scam report",
                unexpected,
            )

        if scam_type == db_models.ScamType.EMAIL:
            try:
                _email_adapter.validate_python(identifiers[expected_field])
            except ValidationError:
                raise ValidationException("Invalid scam email address", ["scamEmail"])

        return {
            "scam_type": scam_type,
            "incident_date": incident_date,
            "description": description,
            "country": _clean(data.country) or DEFAULT_COUNTRY,
            "city": _clean(data.city),
            "state": _clean(data.state),
            "zip_code": _clean(data.zip_code),
            **identifiers,
        }

    @staticmethod
    def create_report(
        db: Session,
        data: schemas.ScamReportCreate,
        reporter: db_models.User,
        proof: Optional[schemas.ProofFileMetadata] = None,
    ) -> db_models.ScamReport:
        """
        Create a report, consolidate it and refresh statistics atomically.

        If another submission creates the same consolidated scam first, the
        UNIQUE identifier constraint fails our insert; the whole submission
        is then rolled back and replayed once, which finds and increments
        the winner's group.

        Args:
            db: Database session
            data: Raw submission
            reporter: Authenticated reporter
            proof: Metadata of an already stored proof file

        Returns:
            The committed report

        Raises:
            ValidationException: If the submission is invalid
            StorageException: If the database keeps refusing the write
        """
        values = ScamReportService.validate_submission(data)

        if proof is not None:
            values.update(
                has_proof_document=True,
                proof_file_path=proof.path,
                proof_file_name=proof.name,
                proof_file_type=proof.content_type,
                proof_file_size=proof.size,
            )

        repo = ScamReportRepository(db)
        for attempt in range(1, SUBMISSION_ATTEMPTS + 1):
            try:
                report = repo.add(
                    db_models.ScamReport(
                        user_id=reporter.id,
                        reported_at=utc_now(),
                        is_verified=False,
                        is_published=True,
                        **values,
                    )
                )
                group = ConsolidationService.consolidate(db, report)
                if group is None:
                    ScamStatsService.refresh(db)
                repo.commit()
            except DomainException:
                repo.rollback()
                raise
            except IntegrityError as e:
                repo.rollback()
                if attempt < SUBMISSION_ATTEMPTS:
                    logger.warning(
                        f"Concurrent consolidation conflict, retrying submission: {e.orig}"
                    )
                    continue
                logger.error(f"Scam report submission failed after retry: {e.orig}")
                raise StorageException("Failed to save scam report") from e
            except SQLAlchemyError as e:
                repo.rollback()
                logger.error(f"Scam report submission failed: {e}")
                raise StorageException("Failed to save scam report") from e

            repo.refresh(report)
            logger.info(
                f"Scam report {report.id} ({report.scam_type.value}) created by "
                f"user {reporter.id}"
                + (f", consolidated into {group.id}" if group is not None else "")
            )
            return report

        # Unreachable: the loop either returns or raises
        raise StorageException("Failed to save scam report")

    @staticmethod
    def get_report_or_404(db: Session, report_id: int) -> db_models.ScamReport:
        """
        Raises:
            ScamReportNotFoundException: If the report doesn't exist
        """
        report = ScamReportRepository(db).get_with_reporter(report_id)
        if report is None:
            raise ScamReportNotFoundException("Scam report not found")
        return report

    @staticmethod
    def get_visible_report(
        db: Session, report_id: int, viewer: Optional[db_models.User]
    ) -> db_models.ScamReport:
        """
        Fetch a report the viewer is allowed to read.

        Unpublished reports are readable by admins and by their reporter.

        Raises:
            ScamReportNotFoundException: If the report doesn't exist
            ReportNotAvailableException: If it's unpublished and hidden from the viewer
        """
        report = ScamReportService.get_report_or_404(db, report_id)
        if _is_visible(report) or _is_admin(viewer):
            return report
        if viewer is not None and viewer.id == report.user_id:
            return report
        raise ReportNotAvailableException()

    @staticmethod
    def verify_report(
        db: Session, report_id: int, admin: db_models.User
    ) -> tuple[db_models.ScamReport, bool]:
        """
        Verify a report and its consolidated scam. Idempotent.

        Verification never flows backwards: the group stays verified even if
        the report is later unpublished.

        Returns:
            Tuple of (report, True if it was already verified)
        """
        report = ScamReportService.get_report_or_404(db, report_id)
        if report.is_verified:
            logger.info(
                f"Scam report {report.id} already verified by {report.verified_by}"
            )
            return report, True

        report.is_verified = True
        report.verified_by = admin.id
        report.verified_at = utc_now()

        group = ConsolidationService.get_group_for_report(db, report.id)
        if group is not None and not group.is_verified:
            group.is_verified = True
            logger.info(f"Consolidated scam {group.id} verified through report {report.id}")

        ScamStatsService.refresh(db)
        ScamReportService._commit(db, report, "verify")
        logger.info(f"Scam report {report.id} verified by admin {admin.id}")
        return report, False

    @staticmethod
    def set_published(
        db: Session, report_id: int, admin: db_models.User, published: bool
    ) -> db_models.ScamReport:
        """
        Publish or unpublish a report. Repeat calls overwrite the timestamp.
        """
        report = ScamReportService.get_report_or_404(db, report_id)
        report.is_published = published
        report.published_by = admin.id
        report.published_at = utc_now()

        ScamStatsService.refresh(db)
        action = "publish" if published else "unpublish"
        ScamReportService._commit(db, report, action)
        logger.info(f"Scam report {report.id} {action}ed by admin {admin.id}")
        return report

    @staticmethod
    def _commit(db: Session, report: db_models.ScamReport, action: str) -> None:
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to {action} scam report {report.id}: {e}")
            raise StorageException(f"Failed to {action} scam report") from e
        db.refresh(report)

    @staticmethod
    def list_reports(
        db: Session,
        filters: schemas.ScamReportFilters,
        viewer: Optional[db_models.User],
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> schemas.ScamReportListResponse:
        """
        One page of reports, newest first, filtered for the viewer's role.

        A page past the end is empty but still reports the real totals, so
        infinite scroll can stop when page >= totalPages.

        Raises:
            ValidationException: If page or limit is out of range
        """
        if page < 1:
            raise ValidationException("Page must be 1 or greater", ["page"])
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationException(
                f"Limit must be between 1 and {MAX_PAGE_SIZE}", ["limit"]
            )

        reports, total = ScamReportRepository(db).list_filtered(
            include_unpublished=_is_admin(viewer),
            is_verified=filters.is_verified,
            scam_type=filters.scam_type,
            search=filters.search,
            skip=(page - 1) * limit,
            limit=limit,
        )

        return schemas.ScamReportListResponse(
            reports=[ScamReportService.build_report_response(r) for r in reports],
            pagination=schemas.PaginationInfo(
                page=page,
                limit=limit,
                total_count=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    @staticmethod
    def get_recent_reports(
        db: Session, viewer: Optional[db_models.User], limit: int = 5
    ) -> List[schemas.RecentScamReport]:
        reports = ScamReportRepository(db).get_recent(limit, _is_admin(viewer))
        return [
            schemas.RecentScamReport(
                **ScamReportService.build_report_response(report).model_dump(),
                consolidated_info=ScamReportService._consolidated_info(report),
            )
            for report in reports
        ]

    @staticmethod
    def get_reports_by_type(
        db: Session, scam_type: db_models.ScamType, viewer: Optional[db_models.User]
    ) -> List[db_models.ScamReport]:
        return ScamReportRepository(db).get_by_type(scam_type, _is_admin(viewer))

    @staticmethod
    def get_published_reports(db: Session) -> List[db_models.ScamReport]:
        return ScamReportRepository(db).get_published()

    @staticmethod
    def get_unpublished_reports(db: Session) -> List[db_models.ScamReport]:
        return ScamReportRepository(db).get_unpublished()

    @staticmethod
    def get_reports_for_user(db: Session, user_id: int) -> List[db_models.ScamReport]:
        return ScamReportRepository(db).get_by_user(user_id)

    @staticmethod
    def get_report_detail(
        db: Session, report_id: int, viewer: Optional[db_models.User]
    ) -> schemas.ScamReportDetail:
        """
        Report with comments and its consolidated scam.

        Comment authors appear by username; real names and emails are only
        included for admin viewers.
        """
        report = ScamReportService.get_visible_report(db, report_id, viewer)
        show_identity = _is_admin(viewer)

        comments = [
            ScamReportService.build_comment_response(comment, show_identity)
            for comment in ScamCommentRepository(db).get_for_report(report.id)
        ]

        return schemas.ScamReportDetail(
            **ScamReportService.build_report_response(report).model_dump(),
            comments=comments,
            consolidated_info=ScamReportService._consolidated_info(report),
        )

    @staticmethod
    def _consolidated_info(
        report: db_models.ScamReport,
    ) -> Optional[schemas.ConsolidatedScamResponse]:
        if report.consolidation is None:
            return None
        return schemas.ConsolidatedScamResponse.model_validate(
            report.consolidation.consolidated_scam
        )

    @staticmethod
    def build_report_response(
        report: db_models.ScamReport,
    ) -> schemas.ScamReportResponse:
        """Report schema with reporter display info attached."""
        response = schemas.ScamReportResponse.model_validate(report)
        if report.reporter is not None:
            response.user = schemas.ReporterInfo.model_validate(report.reporter)
        return response

    @staticmethod
    def build_comment_response(
        comment: db_models.ScamComment, show_identity: bool
    ) -> schemas.ScamCommentResponse:
        response = schemas.ScamCommentResponse.model_validate(comment)
        author = comment.author
        if author is not None:
            response.user = schemas.CommentAuthor(
                id=author.id,
                username=author.username,
                display_name=author.display_name if show_identity else None,
                email=author.email if show_identity else None,
            )
        return response
