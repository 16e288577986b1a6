from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import (
    DEFAULT_PAGE_SIZE,
    PaginationLimit,
    PaginationLimitSmall,
    PaginationPage,
)
from helpers.rate_limiter import SUBMISSION_RATE_LIMIT, limiter
from repositories.database import get_db
from services import FileStorageService, ScamReportService

router = APIRouter(prefix="/scam-reports", tags=["scam-reports"])


def _report_list(reports: List[db_models.ScamReport]) -> List[schemas.ScamReportResponse]:
    return [ScamReportService.build_report_response(report) for report in reports]


def _action_response(
    report: db_models.ScamReport, message: str
) -> schemas.ScamReportActionResponse:
    return schemas.ScamReportActionResponse(
        message=message, report=ScamReportService.build_report_response(report)
    )


@router.post(
    "",
    response_model=schemas.ScamReportActionResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(SUBMISSION_RATE_LIMIT)
def create_scam_report(
    request: Request,
    report: schemas.ScamReportCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> schemas.ScamReportActionResponse:
    """
    Submit a scam report.

    The report is consolidated with earlier reports of the same identifier
    and the statistics are refreshed in the same transaction.
    """
    created = ScamReportService.create_report(db, report, current_user)
    return _action_response(created, "Scam report created successfully")


@router.post(
    "/upload",
    response_model=schemas.ScamReportActionResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(SUBMISSION_RATE_LIMIT)
def create_scam_report_with_proof(
    request: Request,
    proof_file: UploadFile = File(..., alias="proofFile"),
    scam_type: Optional[str] = Form(None, alias="scamType"),
    scam_phone_number: Optional[str] = Form(None, alias="scamPhoneNumber"),
    scam_email: Optional[str] = Form(None, alias="scamEmail"),
    scam_business_name: Optional[str] = Form(None, alias="scamBusinessName"),
    incident_date: Optional[str] = Form(None, alias="incidentDate"),
    country: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    zip_code: Optional[str] = Form(None, alias="zipCode"),
    description: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> schemas.ScamReportActionResponse:
    """
    Submit a scam report with a proof document (multipart form).

    The submission is validated before the file is written; if saving the
    report fails, the stored file is removed again.
    """
    data = schemas.ScamReportCreate(
        scam_type=scam_type,
        scam_phone_number=scam_phone_number,
        scam_email=scam_email,
        scam_business_name=scam_business_name,
        incident_date=incident_date,
        country=country,
        city=city,
        state=state,
        zip_code=zip_code,
        description=description,
    )
    ScamReportService.validate_submission(data)

    proof = FileStorageService.save(
        proof_file.file, proof_file.filename, proof_file.content_type
    )
    try:
        created = ScamReportService.create_report(db, data, current_user, proof)
    except Exception:
        FileStorageService.delete(proof.path)
        raise

    return _action_response(created, "Scam report created successfully")


@router.get("", response_model=schemas.ScamReportListResponse)
def list_scam_reports(
    is_verified: Optional[bool] = Query(None, alias="isVerified"),
    scam_type: Optional[db_models.ScamType] = Query(None, alias="scamType"),
    search: Optional[str] = None,
    page: PaginationPage = 1,
    limit: PaginationLimit = DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    """
    Paginated report listing, newest first.

    Admins also see unpublished reports.
    """
    filters = schemas.ScamReportFilters(
        is_verified=is_verified, scam_type=scam_type, search=search
    )
    return ScamReportService.list_reports(db, filters, current_user, page, limit)


@router.get("/recent", response_model=List[schemas.RecentScamReport])
def get_recent_scam_reports(
    limit: PaginationLimitSmall = 5,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    return ScamReportService.get_recent_reports(db, current_user, limit)


@router.get("/by-type/{scam_type}", response_model=List[schemas.ScamReportResponse])
def get_scam_reports_by_type(
    scam_type: db_models.ScamType,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    return _report_list(
        ScamReportService.get_reports_by_type(db, scam_type, current_user)
    )


@router.get("/published", response_model=List[schemas.ScamReportResponse])
def get_published_scam_reports(db: Session = Depends(get_db)):
    return _report_list(ScamReportService.get_published_reports(db))


@router.get("/unpublished", response_model=List[schemas.ScamReportResponse])
def get_unpublished_scam_reports(
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    return _report_list(ScamReportService.get_unpublished_reports(db))


@router.get("/{report_id}", response_model=schemas.ScamReportDetail)
def get_scam_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    """
    Report detail with comments and consolidated scam.

    Unpublished reports are only shown to admins and their reporter.
    """
    return ScamReportService.get_report_detail(db, report_id, current_user)


@router.post("/{report_id}/verify", response_model=schemas.ScamReportActionResponse)
def verify_scam_report(
    report_id: int,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    report, already_verified = ScamReportService.verify_report(db, report_id, admin)
    message = (
        "Scam report was already verified"
        if already_verified
        else "Scam report verified successfully"
    )
    return _action_response(report, message)


@router.post("/{report_id}/publish", response_model=schemas.ScamReportActionResponse)
def publish_scam_report(
    report_id: int,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    report = ScamReportService.set_published(db, report_id, admin, published=True)
    return _action_response(report, "Scam report published successfully")


@router.post("/{report_id}/unpublish", response_model=schemas.ScamReportActionResponse)
def unpublish_scam_report(
    report_id: int,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    report = ScamReportService.set_published(db, report_id, admin, published=False)
    return _action_response(report, "Scam report unpublished successfully")
