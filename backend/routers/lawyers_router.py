"""Lawyer referral endpoints: lawyer profiles and requests for legal help."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import LawyerService

router = APIRouter(tags=["lawyers"])


@router.post(
    "/lawyer-profiles",
    response_model=schemas.LawyerProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_lawyer_profile(
    profile: schemas.LawyerProfileCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    """Register the caller as a lawyer. The profile starts pending verification."""
    return LawyerService.create_profile(db, profile, current_user)


@router.get("/lawyer-profiles", response_model=List[schemas.LawyerProfileResponse])
def list_lawyer_profiles(
    verified: bool = Query(True, description="Only verified profiles unless false"),
    db: Session = Depends(get_db),
):
    return LawyerService.list_profiles(db, verified_only=verified)


@router.get("/lawyer-profiles/{profile_id}", response_model=schemas.LawyerProfileResponse)
def get_lawyer_profile(profile_id: int, db: Session = Depends(get_db)):
    return LawyerService.get_profile(db, profile_id)


@router.patch(
    "/lawyer-profiles/{profile_id}", response_model=schemas.LawyerProfileResponse
)
def update_lawyer_profile(
    profile_id: int,
    changes: schemas.LawyerProfileUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    return LawyerService.update_profile(db, profile_id, changes, current_user)


@router.post(
    "/lawyer-profiles/{profile_id}/verify",
    response_model=schemas.LawyerProfileActionResponse,
)
def verify_lawyer_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    profile = LawyerService.verify_profile(db, profile_id, admin)
    return schemas.LawyerProfileActionResponse(
        message="Lawyer profile verified successfully",
        profile=schemas.LawyerProfileResponse.model_validate(profile),
    )


@router.get(
    "/lawyer-profiles/{profile_id}/requests",
    response_model=List[schemas.LawyerRequestResponse],
)
def list_lawyer_profile_requests(
    profile_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    return LawyerService.list_requests_for_lawyer(db, profile_id, current_user)


@router.post(
    "/lawyer-requests",
    response_model=schemas.LawyerRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_lawyer_request(
    lawyer_request: schemas.LawyerRequestCreate,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
):
    """Ask for legal help. Works without an account."""
    return LawyerService.create_request(db, lawyer_request, current_user)


@router.get("/lawyer-requests", response_model=List[schemas.LawyerRequestResponse])
def list_lawyer_requests(
    status_filter: Optional[db_models.RequestStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    return LawyerService.list_requests(db, status_filter)


@router.patch(
    "/lawyer-requests/{request_id}/status",
    response_model=schemas.LawyerRequestResponse,
)
def update_lawyer_request_status(
    request_id: int,
    body: schemas.LawyerRequestStatusUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    return LawyerService.update_request_status(db, request_id, body.status, current_user)


@router.post(
    "/lawyer-requests/{request_id}/assign",
    response_model=schemas.LawyerRequestResponse,
)
def assign_lawyer_to_request(
    request_id: int,
    body: schemas.LawyerRequestAssign,
    db: Session = Depends(get_db),
    admin: db_models.User = Depends(auth.get_admin_user),
):
    return LawyerService.assign_lawyer(db, request_id, body.lawyer_profile_id)
