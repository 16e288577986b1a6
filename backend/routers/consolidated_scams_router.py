from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import ConsolidationService, ScamReportService, ScamVideoService

router = APIRouter(prefix="/consolidated-scams", tags=["consolidated-scams"])


def _public_view(user: Optional[db_models.User]) -> bool:
    return user is None or not user.is_admin


@router.get("", response_model=List[schemas.ConsolidatedScamResponse])
def list_consolidated_scams(
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    """
    Consolidated scams, most reported first.

    Outside admin accounts, groups made only of unpublished reports are hidden.
    """
    return ConsolidationService.list_consolidated_scams(
        db, published_only=_public_view(current_user)
    )


@router.get(
    "/by-type/{scam_type}", response_model=List[schemas.ConsolidatedScamResponse]
)
def list_consolidated_scams_by_type(
    scam_type: db_models.ScamType,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    return ConsolidationService.list_consolidated_scams(
        db, scam_type, published_only=_public_view(current_user)
    )


@router.post("/rebuild", response_model=schemas.RebuildSummary)
def rebuild_consolidated_scams(
    dry_run: bool = Query(False, alias="dryRun"),
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    """
    Regroup every report from scratch.

    With dryRun the summary is computed and the changes are rolled back.
    """
    return ConsolidationService.rebuild(db, dry_run=dry_run)


@router.get("/{consolidated_scam_id}", response_model=schemas.ConsolidatedScamDetail)
def get_consolidated_scam(
    consolidated_scam_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    """A consolidated scam with the reports linked to it."""
    public_view = _public_view(current_user)
    group = ConsolidationService.get_consolidated_scam(
        db, consolidated_scam_id, published_only=public_view
    )
    reports = ConsolidationService.get_reports_for_group(
        db, group.id, include_unpublished=not public_view
    )
    return schemas.ConsolidatedScamDetail(
        **schemas.ConsolidatedScamResponse.model_validate(group).model_dump(),
        reports=[ScamReportService.build_report_response(r) for r in reports],
    )


@router.get(
    "/{consolidated_scam_id}/videos", response_model=List[schemas.ScamVideoResponse]
)
def get_consolidated_scam_videos(
    consolidated_scam_id: int, db: Session = Depends(get_db)
):
    ConsolidationService.get_consolidated_scam(db, consolidated_scam_id)
    return ScamVideoService.list_for_consolidated_scam(db, consolidated_scam_id)


@router.post(
    "/{consolidated_scam_id}/verify",
    response_model=schemas.ConsolidatedScamActionResponse,
)
def verify_consolidated_scam(
    consolidated_scam_id: int,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    group, already_verified = ConsolidationService.verify_consolidated_scam(
        db, consolidated_scam_id, admin
    )
    message = (
        "Consolidated scam was already verified"
        if already_verified
        else "Consolidated scam verified successfully"
    )
    return schemas.ConsolidatedScamActionResponse(
        message=message,
        consolidated_scam=schemas.ConsolidatedScamResponse.model_validate(group),
    )
