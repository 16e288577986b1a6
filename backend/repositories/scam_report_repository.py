"""
Scam report repository: listing, filtering and aggregate counts.
"""

import re
from typing import List, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Query, Session, joinedload
from sqlalchemy.sql.elements import ColumnElement

import repositories.db_models as db_models
from .base import BaseRepository
from .database import digits_only

_LIKE_SPECIALS = re.compile(r"([%_\\])")


def _like_pattern(term: str) -> str:
    """Wrap a user search term for LIKE, escaping its wildcards."""
    escaped = _LIKE_SPECIALS.sub(r"\\\1", term)
    return f"%{escaped}%"


def _digits_only_sql(column: ColumnElement, dialect_name: str) -> ColumnElement:
    """SQL expression stripping every non-digit from column."""
    if dialect_name == "postgresql":
        return func.regexp_replace(column, r"\D", "", "g")
    # Registered per connection in repositories.database
    return func.digits_only(column)


def published_condition() -> ColumnElement:
    """Rows visible to the public. NULL is a legacy published row."""
    return or_(
        db_models.ScamReport.is_published.is_(None),
        db_models.ScamReport.is_published.is_(True),
    )


class ScamReportRepository(BaseRepository[db_models.ScamReport]):
    """Repository for ScamReport entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.ScamReport, db)

    def _base_query(self, include_unpublished: bool) -> Query:
        query = self.db.query(db_models.ScamReport).options(
            joinedload(db_models.ScamReport.reporter)
        )
        if not include_unpublished:
            query = query.filter(published_condition())
        return query

    @staticmethod
    def _newest_first(query: Query) -> Query:
        return query.order_by(
            db_models.ScamReport.reported_at.desc(), db_models.ScamReport.id.desc()
        )

    def _apply_search(self, query: Query, search: str) -> Query:
        """
        Case-insensitive substring match over identifiers, description and
        location. Phone numbers additionally match on digits alone, so
        "5550100" finds "555-0100".
        """
        report = db_models.ScamReport
        pattern = _like_pattern(search)
        conditions = [
            column.ilike(pattern, escape="\\")
            for column in (
                report.scam_phone_number,
                report.scam_email,
                report.scam_business_name,
                report.description,
                report.city,
                report.state,
                report.zip_code,
                report.country,
            )
        ]

        digits = digits_only(search)
        if digits:
            dialect_name = self.db.get_bind().dialect.name
            stored_digits = _digits_only_sql(report.scam_phone_number, dialect_name)
            conditions.append(stored_digits.like(f"%{digits}%"))

        return query.filter(or_(*conditions))

    def list_filtered(
        self,
        *,
        include_unpublished: bool,
        is_verified: Optional[bool] = None,
        scam_type: Optional[db_models.ScamType] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[List[db_models.ScamReport], int]:
        """
        Filtered page of reports, newest first.

        Returns:
            Tuple of (page of reports, total matching rows)
        """
        query = self._base_query(include_unpublished)

        if is_verified is not None:
            query = query.filter(db_models.ScamReport.is_verified.is_(is_verified))
        if scam_type is not None:
            query = query.filter(db_models.ScamReport.scam_type == scam_type)
        if search and search.strip():
            query = self._apply_search(query, search.strip())

        total = query.order_by(None).count()
        reports = self._newest_first(query).offset(skip).limit(limit).all()
        return reports, total

    def get_with_reporter(self, report_id: int) -> Optional[db_models.ScamReport]:
        return (
            self.db.query(db_models.ScamReport)
            .options(joinedload(db_models.ScamReport.reporter))
            .filter(db_models.ScamReport.id == report_id)
            .first()
        )

    def get_recent(
        self, limit: int, include_unpublished: bool
    ) -> List[db_models.ScamReport]:
        query = self._base_query(include_unpublished).options(
            joinedload(db_models.ScamReport.consolidation)
        )
        return self._newest_first(query).limit(limit).all()

    def get_by_type(
        self, scam_type: db_models.ScamType, include_unpublished: bool
    ) -> List[db_models.ScamReport]:
        query = self._base_query(include_unpublished).filter(
            db_models.ScamReport.scam_type == scam_type
        )
        return self._newest_first(query).all()

    def get_published(self) -> List[db_models.ScamReport]:
        return self._newest_first(self._base_query(include_unpublished=False)).all()

    def get_unpublished(self) -> List[db_models.ScamReport]:
        query = self._base_query(include_unpublished=True).filter(
            db_models.ScamReport.is_published.is_(False)
        )
        return self._newest_first(query).all()

    def get_by_user(self, user_id: int) -> List[db_models.ScamReport]:
        query = self._base_query(include_unpublished=True).filter(
            db_models.ScamReport.user_id == user_id
        )
        return self._newest_first(query).all()

    def get_for_consolidated_scam(
        self, consolidated_scam_id: int, include_unpublished: bool
    ) -> List[db_models.ScamReport]:
        query = (
            self._base_query(include_unpublished)
            .join(
                db_models.ScamReportConsolidation,
                db_models.ScamReportConsolidation.scam_report_id
                == db_models.ScamReport.id,
            )
            .filter(
                db_models.ScamReportConsolidation.consolidated_scam_id
                == consolidated_scam_id
            )
        )
        return self._newest_first(query).all()

    def get_all_in_reported_order(self) -> List[db_models.ScamReport]:
        """Every report, oldest first, for replaying consolidation."""
        return (
            self.db.query(db_models.ScamReport)
            .order_by(
                db_models.ScamReport.reported_at.asc(), db_models.ScamReport.id.asc()
            )
            .all()
        )

    def aggregate_counts(self, published_only: bool) -> dict[str, int]:
        """
        Count reports by type, with proof and verified in one query.

        Args:
            published_only: Restrict to reports visible to the public

        Returns:
            Mapping of ScamStat column name to count
        """
        report = db_models.ScamReport

        def _count_where(condition: ColumnElement) -> ColumnElement:
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        query = self.db.query(
            func.count(report.id),
            _count_where(report.scam_type == db_models.ScamType.PHONE),
            _count_where(report.scam_type == db_models.ScamType.EMAIL),
            _count_where(report.scam_type == db_models.ScamType.BUSINESS),
            _count_where(report.has_proof_document.is_(True)),
            _count_where(report.is_verified.is_(True)),
        )
        if published_only:
            query = query.filter(published_condition())

        total, phone, email, business, with_proof, verified = query.one()
        return {
            "total_reports": int(total),
            "phone_scams": int(phone),
            "email_scams": int(email),
            "business_scams": int(business),
            "reports_with_proof": int(with_proof),
            "verified_reports": int(verified),
        }
