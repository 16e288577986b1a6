"""
Request and response schemas.

The wire format is camelCase (`scamType`, `reportedAt`); snake_case field
names are accepted on input as well. Datetimes always serialize as UTC.
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from helpers.time_utils import as_utc
from repositories.db_models import (
    AuthProvider,
    ContactMethod,
    LawyerSpecialization,
    RequestStatus,
    ScamType,
    StatsScope,
    UrgencyLevel,
    UserRole,
    VerificationStatus,
)

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]

USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,20}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# User Schemas
class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    display_name: str = Field(..., min_length=2, max_length=100)
    username: Optional[str] = Field(default=None, pattern=USERNAME_PATTERN)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: int
    email: str
    display_name: str
    username: Optional[str] = None
    role: UserRole
    auth_provider: AuthProvider
    created_at: UtcDatetime


class RegisterResponse(CamelModel):
    success: bool = True
    user: UserResponse


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UsernameCheckRequest(CamelModel):
    username: str = Field(..., min_length=1)


class UsernameCheckResponse(CamelModel):
    available: bool
    message: str


class UsernameUpdateRequest(CamelModel):
    username: str = Field(..., pattern=USERNAME_PATTERN)


class UsernameUpdateResponse(CamelModel):
    success: bool = True
    message: str
    user: UserResponse


class ReporterInfo(CamelModel):
    """Reporter identity shown next to a report."""

    id: int
    display_name: str
    email: str
    username: Optional[str] = None


class CommentAuthor(CamelModel):
    """Comment author. Real name and email are only filled in for admins."""

    id: int
    username: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None


# Scam Report Schemas
class ScamReportCreate(CamelModel):
    """
    Report submission body.

    Required fields are checked by the service so that every missing field is
    reported at once; the types here only describe the accepted shape.
    """

    scam_type: Optional[str] = None
    scam_phone_number: Optional[str] = None
    scam_email: Optional[str] = None
    scam_business_name: Optional[str] = None
    incident_date: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    description: Optional[str] = None


class ProofFileMetadata(CamelModel):
    """What the core knows about a stored proof file."""

    path: str
    name: str
    content_type: str
    size: int


class ScamReportResponse(CamelModel):
    id: int
    user_id: int
    scam_type: ScamType
    scam_phone_number: Optional[str] = None
    scam_email: Optional[str] = None
    scam_business_name: Optional[str] = None
    incident_date: date
    country: str
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    description: str
    has_proof_document: bool = False
    proof_file_path: Optional[str] = None
    proof_file_name: Optional[str] = None
    proof_file_type: Optional[str] = None
    proof_file_size: Optional[int] = None
    reported_at: UtcDatetime
    is_verified: bool
    verified_by: Optional[int] = None
    verified_at: Optional[UtcDatetime] = None
    is_published: Optional[bool] = None
    published_by: Optional[int] = None
    published_at: Optional[UtcDatetime] = None
    user: Optional[ReporterInfo] = None


class ScamReportActionResponse(CamelModel):
    success: bool = True
    message: str
    report: ScamReportResponse


class PaginationInfo(CamelModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


class ScamReportListResponse(CamelModel):
    reports: List[ScamReportResponse]
    pagination: PaginationInfo


class ScamReportFilters(CamelModel):
    is_verified: Optional[bool] = None
    scam_type: Optional[ScamType] = None
    search: Optional[str] = None


# Consolidated Scam Schemas
class ConsolidatedScamResponse(CamelModel):
    id: int
    scam_type: ScamType
    identifier: str
    report_count: int
    first_reported_at: UtcDatetime
    last_reported_at: UtcDatetime
    is_verified: bool


class ConsolidatedScamDetail(ConsolidatedScamResponse):
    reports: List[ScamReportResponse] = []


class ConsolidatedScamActionResponse(CamelModel):
    success: bool = True
    message: str
    consolidated_scam: ConsolidatedScamResponse


class RebuildSummary(CamelModel):
    reports_replayed: int = 0
    reports_skipped: int = 0
    groups_created: int = 0
    links_created: int = 0
    verified_groups: int = 0
    dry_run: bool = False


# Scam Comment Schemas
class ScamCommentCreate(CamelModel):
    scam_report_id: int
    content: str = Field(..., min_length=1, max_length=5000)


class ScamCommentResponse(CamelModel):
    id: int
    scam_report_id: int
    user_id: int
    content: str
    created_at: UtcDatetime
    user: Optional[CommentAuthor] = None


class RecentScamReport(ScamReportResponse):
    consolidated_info: Optional[ConsolidatedScamResponse] = None


class ScamReportDetail(RecentScamReport):
    comments: List[ScamCommentResponse] = []


# Statistics Schemas
class ScamStatResponse(CamelModel):
    id: int
    date: UtcDatetime
    scope: StatsScope
    total_reports: int
    phone_scams: int
    email_scams: int
    business_scams: int
    reports_with_proof: int
    verified_reports: int


# Lawyer Schemas
class LawyerProfileBase(CamelModel):
    bar_number: str = Field(..., min_length=1)
    years_of_experience: int = Field(..., ge=0)
    firm_name: Optional[str] = None
    primary_specialization: LawyerSpecialization
    secondary_specializations: Optional[List[LawyerSpecialization]] = None
    office_location: str = Field(..., min_length=1)
    office_phone: str = Field(..., min_length=1)
    office_email: EmailStr
    bio: str = Field(..., min_length=1)
    profile_photo_url: Optional[str] = None
    website_url: Optional[str] = None
    verification_document_path: Optional[str] = None
    accepting_new_clients: Optional[bool] = True
    case_types: Optional[List[str]] = None
    offers_free_consultation: Optional[bool] = False
    consultation_fee: Optional[str] = None


class LawyerProfileCreate(LawyerProfileBase):
    pass


class LawyerProfileUpdate(CamelModel):
    bar_number: Optional[str] = Field(default=None, min_length=1)
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    firm_name: Optional[str] = None
    primary_specialization: Optional[LawyerSpecialization] = None
    secondary_specializations: Optional[List[LawyerSpecialization]] = None
    office_location: Optional[str] = Field(default=None, min_length=1)
    office_phone: Optional[str] = Field(default=None, min_length=1)
    office_email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, min_length=1)
    profile_photo_url: Optional[str] = None
    website_url: Optional[str] = None
    accepting_new_clients: Optional[bool] = None
    case_types: Optional[List[str]] = None
    offers_free_consultation: Optional[bool] = None
    consultation_fee: Optional[str] = None


class LawyerProfileResponse(LawyerProfileBase):
    id: int
    user_id: int
    office_email: str
    verification_status: VerificationStatus
    verified_at: Optional[UtcDatetime] = None
    verified_by: Optional[int] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class LawyerProfileActionResponse(CamelModel):
    success: bool = True
    message: str
    profile: LawyerProfileResponse


class LawyerRequestCreate(CamelModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    scam_type: ScamType
    scam_report_id: Optional[int] = None
    loss_amount: Optional[str] = None
    description: str = Field(..., min_length=1)
    urgency: UrgencyLevel = UrgencyLevel.MEDIUM
    preferred_contact: ContactMethod = ContactMethod.EMAIL


class LawyerRequestStatusUpdate(CamelModel):
    status: RequestStatus


class LawyerRequestAssign(CamelModel):
    lawyer_profile_id: int


class LawyerRequestResponse(CamelModel):
    id: int
    full_name: str
    email: str
    phone: str
    user_id: Optional[int] = None
    scam_type: ScamType
    scam_report_id: Optional[int] = None
    loss_amount: Optional[str] = None
    description: str
    urgency: UrgencyLevel
    preferred_contact: ContactMethod
    status: RequestStatus
    lawyer_profile_id: Optional[int] = None
    created_at: UtcDatetime
    updated_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None


# Scam Video Schemas
class ScamVideoCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    youtube_url: str = Field(..., min_length=1)
    youtube_video_id: Optional[str] = None
    scam_type: Optional[ScamType] = None
    featured: Optional[bool] = False
    consolidated_scam_id: Optional[int] = None


class ScamVideoUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    youtube_url: Optional[str] = Field(default=None, min_length=1)
    youtube_video_id: Optional[str] = None
    scam_type: Optional[ScamType] = None
    featured: Optional[bool] = None
    consolidated_scam_id: Optional[int] = None


class ScamVideoResponse(CamelModel):
    id: int
    title: str
    description: str
    youtube_url: str
    youtube_video_id: str
    scam_type: Optional[ScamType] = None
    featured: bool = False
    added_by_id: int
    added_at: UtcDatetime
    updated_at: UtcDatetime
    consolidated_scam_id: Optional[int] = None


# Contact Form Schemas
class ContactCategory(str, Enum):
    GENERAL = "general"
    FEEDBACK = "feedback"
    QUESTION = "question"
    REPORT = "report"
    OTHER = "other"


class ContactFormRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)
    category: Optional[ContactCategory] = None


class ContactFormResponse(CamelModel):
    success: bool
    message: str


# Help Chatbot Schemas
class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(CamelModel):
    role: ChatRole
    content: str = Field(..., min_length=1, max_length=4000)


class ChatRequest(CamelModel):
    messages: List[ChatMessage] = Field(..., min_length=1, max_length=50)


class ChatResponse(CamelModel):
    response: str
    citations: List[str] = []
    source: str
    error: Optional[str] = None


