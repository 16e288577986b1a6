"""
Database models using SQLAlchemy 2.0 style with Mapped type hints.

Reports are the source of truth. Consolidated scams and their link rows are
derived from reports and can be rebuilt by replaying them; statistics rows
are an append-only, retention-bounded time series.
"""

import enum
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repositories.database import Base


class ScamType(str, enum.Enum):
    PHONE = "phone"
    EMAIL = "email"
    BUSINESS = "business"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
    LAWYER = "lawyer"


class AuthProvider(str, enum.Enum):
    LOCAL = "local"
    GOOGLE = "google"


class StatsScope(str, enum.Enum):
    """Which report population a statistics row was computed over."""

    PUBLISHED = "published"
    ALL = "all"


class LawyerSpecialization(str, enum.Enum):
    CONSUMER_FRAUD = "consumer_fraud"
    IDENTITY_THEFT = "identity_theft"
    FINANCIAL_RECOVERY = "financial_recovery"
    GENERAL_PRACTICE = "general_practice"
    CYBER_CRIME = "cyber_crime"


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class UrgencyLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContactMethod(str, enum.Enum):
    EMAIL = "email"
    PHONE = "phone"
    EITHER = "either"


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def _enum_column(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Persist enum values (not member names) so rows read like the API."""
    return Enum(enum_cls, name=name, values_callable=_enum_values)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    # Google sign-ins have no local password
    hashed_password: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    display_name: Mapped[str] = mapped_column(String, nullable=False)
    username: Mapped[Optional[str]] = mapped_column(
        String(20), unique=True, index=True, nullable=True
    )
    role: Mapped[UserRole] = mapped_column(
        _enum_column(UserRole, "user_role"), default=UserRole.USER, nullable=False
    )
    auth_provider: Mapped[AuthProvider] = mapped_column(
        _enum_column(AuthProvider, "auth_provider"),
        default=AuthProvider.LOCAL,
        nullable=False,
    )
    google_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    scam_reports: Mapped[List["ScamReport"]] = relationship(
        "ScamReport", back_populates="reporter", foreign_keys="ScamReport.user_id"
    )
    lawyer_profile: Mapped[Optional["LawyerProfile"]] = relationship(
        "LawyerProfile",
        back_populates="user",
        uselist=False,
        foreign_keys="LawyerProfile.user_id",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class ScamReport(Base):
    __tablename__ = "scam_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    scam_type: Mapped[ScamType] = mapped_column(
        _enum_column(ScamType, "scam_type"), nullable=False, index=True
    )
    scam_phone_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    scam_email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    scam_business_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    incident_date: Mapped[date] = mapped_column(Date, nullable=False)

    country: Mapped[str] = mapped_column(String, nullable=False, default="USA")
    city: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    has_proof_document: Mapped[bool] = mapped_column(Boolean, default=False)
    proof_file_path: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    proof_file_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    proof_file_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    proof_file_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    reported_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False, index=True
    )

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # NULL on legacy rows reads as published
    is_published: Mapped[Optional[bool]] = mapped_column(
        Boolean, default=True, nullable=True
    )
    published_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    reporter: Mapped["User"] = relationship(
        "User", back_populates="scam_reports", foreign_keys=[user_id]
    )
    comments: Mapped[List["ScamComment"]] = relationship(
        "ScamComment",
        back_populates="scam_report",
        cascade="all, delete-orphan",
        order_by="ScamComment.created_at",
    )
    consolidation: Mapped[Optional["ScamReportConsolidation"]] = relationship(
        "ScamReportConsolidation",
        back_populates="scam_report",
        uselist=False,
    )

    __table_args__ = (
        Index("ix_scam_reports_published_reported", "is_published", "reported_at"),
    )


class ConsolidatedScam(Base):
    __tablename__ = "consolidated_scams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scam_type: Mapped[ScamType] = mapped_column(
        _enum_column(ScamType, "scam_type"), nullable=False, index=True
    )
    # One group per identifier, enforced by the database
    identifier: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    report_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    first_reported_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False
    )
    last_reported_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, nullable=False
    )
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    links: Mapped[List["ScamReportConsolidation"]] = relationship(
        "ScamReportConsolidation",
        back_populates="consolidated_scam",
        cascade="all, delete-orphan",
    )
    videos: Mapped[List["ScamVideo"]] = relationship(
        "ScamVideo", back_populates="consolidated_scam"
    )


class ScamReportConsolidation(Base):
    """Link row: each report belongs to at most one consolidated scam."""

    __tablename__ = "scam_report_consolidations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scam_report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("scam_reports.id"), unique=True, nullable=False
    )
    consolidated_scam_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("consolidated_scams.id"), nullable=False, index=True
    )

    scam_report: Mapped["ScamReport"] = relationship(
        "ScamReport", back_populates="consolidation"
    )
    consolidated_scam: Mapped["ConsolidatedScam"] = relationship(
        "ConsolidatedScam", back_populates="links"
    )


class ScamComment(Base):
    __tablename__ = "scam_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scam_report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("scam_reports.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    scam_report: Mapped["ScamReport"] = relationship(
        "ScamReport", back_populates="comments"
    )
    author: Mapped["User"] = relationship("User")


class ScamStat(Base):
    """One statistics snapshot. Readers take the newest row per scope."""

    __tablename__ = "scam_stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    date: Mapped[datetime] = mapped_column(DateTime, default=_utc_now, nullable=False)
    scope: Mapped[StatsScope] = mapped_column(
        _enum_column(StatsScope, "stats_scope"),
        default=StatsScope.PUBLISHED,
        nullable=False,
    )
    total_reports: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    phone_scams: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    email_scams: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    business_scams: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reports_with_proof: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    verified_reports: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (Index("ix_scam_stats_scope_id", "scope", "id"),)


class LawyerProfile(Base):
    __tablename__ = "lawyer_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), unique=True, nullable=False
    )

    bar_number: Mapped[str] = mapped_column(String, nullable=False)
    years_of_experience: Mapped[int] = mapped_column(Integer, nullable=False)
    firm_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    primary_specialization: Mapped[LawyerSpecialization] = mapped_column(
        _enum_column(LawyerSpecialization, "lawyer_specialization"), nullable=False
    )
    secondary_specializations: Mapped[Optional[list]] = mapped_column(
        JSON, nullable=True
    )

    office_location: Mapped[str] = mapped_column(String, nullable=False)
    office_phone: Mapped[str] = mapped_column(String, nullable=False)
    office_email: Mapped[str] = mapped_column(String, nullable=False)

    bio: Mapped[str] = mapped_column(Text, nullable=False)
    profile_photo_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    website_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    verification_status: Mapped[VerificationStatus] = mapped_column(
        _enum_column(VerificationStatus, "verification_status"),
        default=VerificationStatus.PENDING,
        nullable=False,
    )
    verification_document_path: Mapped[Optional[str]] = mapped_column(
        String, nullable=True
    )
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    verified_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    accepting_new_clients: Mapped[bool] = mapped_column(Boolean, default=True)
    case_types: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    offers_free_consultation: Mapped[bool] = mapped_column(Boolean, default=False)
    consultation_fee: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, onupdate=_utc_now
    )

    user: Mapped["User"] = relationship(
        "User", back_populates="lawyer_profile", foreign_keys=[user_id]
    )


class LawyerRequest(Base):
    __tablename__ = "lawyer_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    # Anonymous visitors may ask for help too
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    scam_type: Mapped[ScamType] = mapped_column(
        _enum_column(ScamType, "scam_type"), nullable=False
    )
    scam_report_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("scam_reports.id"), nullable=True
    )
    loss_amount: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    urgency: Mapped[UrgencyLevel] = mapped_column(
        _enum_column(UrgencyLevel, "urgency_level"),
        default=UrgencyLevel.MEDIUM,
        nullable=False,
    )
    preferred_contact: Mapped[ContactMethod] = mapped_column(
        _enum_column(ContactMethod, "contact_method"),
        default=ContactMethod.EMAIL,
        nullable=False,
    )

    status: Mapped[RequestStatus] = mapped_column(
        _enum_column(RequestStatus, "request_status"),
        default=RequestStatus.PENDING,
        nullable=False,
        index=True,
    )
    lawyer_profile_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("lawyer_profiles.id"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)


class ScamVideo(Base):
    __tablename__ = "scam_videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    youtube_url: Mapped[str] = mapped_column(String, nullable=False)
    youtube_video_id: Mapped[str] = mapped_column(String, nullable=False)
    scam_type: Mapped[Optional[ScamType]] = mapped_column(
        _enum_column(ScamType, "scam_type"), nullable=True
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    added_by_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    added_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utc_now, onupdate=_utc_now
    )
    consolidated_scam_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("consolidated_scams.id"), nullable=True, index=True
    )

    consolidated_scam: Mapped[Optional["ConsolidatedScam"]] = relationship(
        "ConsolidatedScam", back_populates="videos"
    )
