"""
Consolidation of scam reports into per-identifier groups.

Every report whose identifier is known is linked to exactly one
ConsolidatedScam sharing that identifier. The group's report_count always
equals its number of link rows, and groups are entirely derived data: they
can be thrown away and rebuilt by replaying reports in submission order.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from models.config import settings
from models.exceptions import (
    ConsolidatedScamNotFoundException,
    ReportAlreadyConsolidatedException,
    StorageException,
)
from models.schemas import RebuildSummary
from helpers.time_utils import later_of
from repositories.consolidated_scam_repository import (
    ConsolidatedScamRepository,
    ScamReportConsolidationRepository,
)
from repositories.scam_report_repository import ScamReportRepository
from repositories.scam_video_repository import ScamVideoRepository
from services.identifier_service import canonicalize_identifier, consolidation_key
from services.scam_stats_service import ScamStatsService


class ConsolidationService:
    """Service for consolidated scam groups."""

    @staticmethod
    def consolidate(
        db: Session,
        report: db_models.ScamReport,
        refresh_stats: bool = True,
    ) -> Optional[db_models.ConsolidatedScam]:
        """
        Link a report to the group for its identifier, creating it if needed.

        Nothing is committed; the caller owns the transaction. Creating a new
        group flushes immediately, so a concurrent creator of the same
        identifier surfaces here as an IntegrityError. An existing group is
        read with a row lock, so concurrent submissions for one identifier
        increment its count one after another.

        Args:
            db: Database session
            report: Persisted report (must have an ID)
            refresh_stats: Append statistics snapshots afterwards

        Returns:
            The group the report now belongs to, or None when the report has
            no identifier and stays standalone

        Raises:
            ReportAlreadyConsolidatedException: If the report is already linked
        """
        identifier = consolidation_key(report)
        if identifier is None:
            logger.info(
                f"Scam report {report.id} has no {report.scam_type.value} identifier, "
                f"skipping consolidation"
            )
            return None

        link_repo = ScamReportConsolidationRepository(db)
        if link_repo.get_by_report_id(report.id) is not None:
            raise ReportAlreadyConsolidatedException(report.id)

        group_repo = ConsolidatedScamRepository(db)
        # The locked lookup reloads the row; pending changes must be written first
        db.flush()
        group = group_repo.get_by_identifier(identifier, for_update=True)

        if group is not None:
            group.report_count += 1
            group.last_reported_at = later_of(group.last_reported_at, report.reported_at)
            logger.debug(
                f"Scam report {report.id} joins consolidated scam {group.id} "
                f"({group.report_count} reports)"
            )
        else:
            group = group_repo.add(
                db_models.ConsolidatedScam(
                    scam_type=report.scam_type,
                    identifier=identifier,
                    report_count=1,
                    first_reported_at=report.reported_at,
                    last_reported_at=report.reported_at,
                    is_verified=False,
                )
            )
            logger.info(
                f"New consolidated scam {group.id} for {report.scam_type.value} "
                f"identifier (report {report.id})"
            )

        link_repo.add(
            db_models.ScamReportConsolidation(
                scam_report_id=report.id, consolidated_scam_id=group.id
            )
        )

        if refresh_stats:
            ScamStatsService.refresh(db)

        return group

    @staticmethod
    def get_group_for_report(
        db: Session, report_id: int
    ) -> Optional[db_models.ConsolidatedScam]:
        link = ScamReportConsolidationRepository(db).get_by_report_id(report_id)
        return link.consolidated_scam if link is not None else None

    @staticmethod
    def get_consolidated_scam(
        db: Session, consolidated_scam_id: int, published_only: bool = False
    ) -> db_models.ConsolidatedScam:
        """
        Args:
            published_only: Treat a group with no published report as missing

        Raises:
            ConsolidatedScamNotFoundException: If the group doesn't exist
        """
        repo = ConsolidatedScamRepository(db)
        group = repo.get_by_id(consolidated_scam_id)
        if group is None or (
            published_only and not repo.has_published_report(consolidated_scam_id)
        ):
            raise ConsolidatedScamNotFoundException("Consolidated scam not found")
        return group

    @staticmethod
    def list_consolidated_scams(
        db: Session,
        scam_type: Optional[db_models.ScamType] = None,
        published_only: bool = False,
    ) -> List[db_models.ConsolidatedScam]:
        """Groups without any published report are hidden when published_only."""
        repo = ConsolidatedScamRepository(db)
        if scam_type is None:
            return repo.list_all(published_only)
        return repo.list_by_type(scam_type, published_only)

    @staticmethod
    def get_reports_for_group(
        db: Session, consolidated_scam_id: int, include_unpublished: bool
    ) -> List[db_models.ScamReport]:
        return ScamReportRepository(db).get_for_consolidated_scam(
            consolidated_scam_id, include_unpublished
        )

    @staticmethod
    def verify_consolidated_scam(
        db: Session, consolidated_scam_id: int, admin: db_models.User
    ) -> tuple[db_models.ConsolidatedScam, bool]:
        """
        Mark a group verified. Idempotent.

        Returns:
            Tuple of (group, True if it was already verified)
        """
        group = ConsolidationService.get_consolidated_scam(db, consolidated_scam_id)
        if group.is_verified:
            return group, True

        group.is_verified = True
        db.commit()
        db.refresh(group)
        logger.info(f"Consolidated scam {group.id} verified by admin {admin.id}")
        return group, False

    @staticmethod
    def rebuild(db: Session, dry_run: bool = False) -> RebuildSummary:
        """
        Throw away all groups and links and replay every report.

        Reports are replayed oldest first, so first/last reported times and
        counts come out as if each report had just been submitted. A group
        is verified if any of its reports is. Videos attached to a group are
        re-attached to the group with the same identifier.

        Args:
            db: Database session
            dry_run: Compute the summary, then roll everything back

        Returns:
            Counts describing the rebuilt state

        Raises:
            StorageException: If the database rejects the rebuild
        """
        group_repo = ConsolidatedScamRepository(db)
        link_repo = ScamReportConsolidationRepository(db)
        video_repo = ScamVideoRepository(db)
        summary = RebuildSummary(dry_run=dry_run)

        try:
            attached_videos = [
                (
                    video,
                    video.consolidated_scam.identifier,
                    video.consolidated_scam.scam_type,
                )
                for video in video_repo.list_linked()
            ]
            for video, _, _ in attached_videos:
                video.consolidated_scam_id = None
            db.flush()

            link_repo.delete_all()
            db.expire_all()
            group_repo.delete_all()
            db.expire_all()

            seen_groups: set[int] = set()
            for report in ScamReportRepository(db).get_all_in_reported_order():
                group = ConsolidationService.consolidate(db, report, refresh_stats=False)
                if group is None:
                    summary.reports_skipped += 1
                    continue

                summary.reports_replayed += 1
                summary.links_created += 1
                if group.id not in seen_groups:
                    seen_groups.add(group.id)
                    summary.groups_created += 1
                if report.is_verified and not group.is_verified:
                    group.is_verified = True
                    summary.verified_groups += 1

            for video, old_identifier, old_type in attached_videos:
                video.consolidated_scam_id = ConsolidationService._find_group_id(
                    group_repo, old_type, old_identifier
                )

            ScamStatsService.refresh(db)

            if dry_run:
                db.rollback()
            else:
                db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Consolidation rebuild failed: {e}")
            raise StorageException("Consolidation rebuild failed") from e

        logger.info(
            f"Consolidation rebuild{' (dry run)' if dry_run else ''}: "
            f"{summary.reports_replayed} reports into {summary.groups_created} groups, "
            f"{summary.reports_skipped} skipped, {summary.verified_groups} verified"
        )
        return summary

    @staticmethod
    def _find_group_id(
        group_repo: ConsolidatedScamRepository,
        scam_type: db_models.ScamType,
        identifier: str,
    ) -> Optional[int]:
        group = group_repo.get_by_identifier(identifier)
        if group is None and settings.CONSOLIDATION_CANONICALIZE:
            group = group_repo.get_by_identifier(
                canonicalize_identifier(scam_type, identifier)
            )
        return group.id if group is not None else None
