"""
Lawyer referrals: lawyer profiles and victims' requests for legal help.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.time_utils import utc_now
from models.exceptions import (
    InsufficientPermissionsException,
    LawyerProfileExistsException,
    LawyerProfileNotFoundException,
    LawyerRequestNotFoundException,
)
from repositories.lawyer_repository import (
    LawyerProfileRepository,
    LawyerRequestRepository,
)


def _enum_values(values: Optional[list]) -> Optional[list]:
    """JSON columns store plain strings, not enum members."""
    if values is None:
        return None
    return [getattr(value, "value", value) for value in values]


class LawyerService:
    """Service for lawyer profiles and lawyer requests."""

    @staticmethod
    def create_profile(
        db: Session, data: schemas.LawyerProfileCreate, user: db_models.User
    ) -> db_models.LawyerProfile:
        """
        Create the caller's lawyer profile, pending verification.

        Raises:
            LawyerProfileExistsException: If the user already has one
        """
        repo = LawyerProfileRepository(db)
        if repo.get_by_user_id(user.id) is not None:
            raise LawyerProfileExistsException()

        values = data.model_dump()
        values["secondary_specializations"] = _enum_values(
            values.get("secondary_specializations")
        )
        profile = repo.create(
            db_models.LawyerProfile(
                user_id=user.id,
                verification_status=db_models.VerificationStatus.PENDING,
                **values,
            )
        )
        logger.info(f"Lawyer profile {profile.id} created for user {user.id}")
        return profile

    @staticmethod
    def list_profiles(db: Session, verified_only: bool = True) -> List[db_models.LawyerProfile]:
        return LawyerProfileRepository(db).list_profiles(verified_only)

    @staticmethod
    def get_profile(db: Session, profile_id: int) -> db_models.LawyerProfile:
        """
        Raises:
            LawyerProfileNotFoundException: If the profile doesn't exist
        """
        profile = LawyerProfileRepository(db).get_by_id(profile_id)
        if profile is None:
            raise LawyerProfileNotFoundException("Lawyer profile not found")
        return profile

    @staticmethod
    def get_profile_for_user(db: Session, user_id: int) -> db_models.LawyerProfile:
        profile = LawyerProfileRepository(db).get_by_user_id(user_id)
        if profile is None:
            raise LawyerProfileNotFoundException(
                "Lawyer profile not found for this user"
            )
        return profile

    @staticmethod
    def update_profile(
        db: Session,
        profile_id: int,
        data: schemas.LawyerProfileUpdate,
        user: db_models.User,
    ) -> db_models.LawyerProfile:
        """
        Patch a profile. Only its owner or an admin may do so.

        Raises:
            LawyerProfileNotFoundException: If the profile doesn't exist
            InsufficientPermissionsException: If the caller is neither owner nor admin
        """
        profile = LawyerService.get_profile(db, profile_id)
        if profile.user_id != user.id and not user.is_admin:
            raise InsufficientPermissionsException("Permission denied")

        changes = data.model_dump(exclude_unset=True)
        if "secondary_specializations" in changes:
            changes["secondary_specializations"] = _enum_values(
                changes["secondary_specializations"]
            )
        for field, value in changes.items():
            setattr(profile, field, value)

        return LawyerProfileRepository(db).update(profile)

    @staticmethod
    def verify_profile(
        db: Session, profile_id: int, admin: db_models.User
    ) -> db_models.LawyerProfile:
        profile = LawyerService.get_profile(db, profile_id)
        profile.verification_status = db_models.VerificationStatus.VERIFIED
        profile.verified_at = utc_now()
        profile.verified_by = admin.id
        profile = LawyerProfileRepository(db).update(profile)
        logger.info(f"Lawyer profile {profile.id} verified by admin {admin.id}")
        return profile

    @staticmethod
    def create_request(
        db: Session,
        data: schemas.LawyerRequestCreate,
        requester: Optional[db_models.User],
    ) -> db_models.LawyerRequest:
        """Record a request for legal help. Anonymous visitors may ask too."""
        request = LawyerRequestRepository(db).create(
            db_models.LawyerRequest(
                user_id=requester.id if requester is not None else None,
                status=db_models.RequestStatus.PENDING,
                **data.model_dump(),
            )
        )
        logger.info(
            f"Lawyer request {request.id} created "
            f"({'user ' + str(requester.id) if requester else 'anonymous'})"
        )
        return request

    @staticmethod
    def list_requests(
        db: Session, status: Optional[db_models.RequestStatus] = None
    ) -> List[db_models.LawyerRequest]:
        return LawyerRequestRepository(db).list_requests(status)

    @staticmethod
    def list_requests_for_lawyer(
        db: Session, profile_id: int, user: db_models.User
    ) -> List[db_models.LawyerRequest]:
        """
        Raises:
            LawyerProfileNotFoundException: If the profile doesn't exist
            InsufficientPermissionsException: If the caller is neither owner nor admin
        """
        profile = LawyerService.get_profile(db, profile_id)
        if profile.user_id != user.id and not user.is_admin:
            raise InsufficientPermissionsException("Permission denied")
        return LawyerRequestRepository(db).list_for_lawyer(profile.id)

    @staticmethod
    def get_request(db: Session, request_id: int) -> db_models.LawyerRequest:
        request = LawyerRequestRepository(db).get_by_id(request_id)
        if request is None:
            raise LawyerRequestNotFoundException("Lawyer request not found")
        return request

    @staticmethod
    def update_request_status(
        db: Session,
        request_id: int,
        status: db_models.RequestStatus,
        user: db_models.User,
    ) -> db_models.LawyerRequest:
        """
        Move a request to a new status.

        The assigned lawyer or an admin may change it; unassigned requests
        are admin-only. Completing a request stamps completed_at.

        Raises:
            LawyerRequestNotFoundException: If the request doesn't exist
            InsufficientPermissionsException: If the caller may not change it
        """
        request = LawyerService.get_request(db, request_id)

        if not user.is_admin:
            assigned = (
                LawyerProfileRepository(db).get_by_id(request.lawyer_profile_id)
                if request.lawyer_profile_id is not None
                else None
            )
            if assigned is None or assigned.user_id != user.id:
                raise InsufficientPermissionsException("Permission denied")

        now = utc_now()
        request.status = status
        request.updated_at = now
        if status == db_models.RequestStatus.COMPLETED:
            request.completed_at = now

        request = LawyerRequestRepository(db).update(request)
        logger.info(f"Lawyer request {request.id} moved to {status.value} by user {user.id}")
        return request

    @staticmethod
    def assign_lawyer(
        db: Session, request_id: int, profile_id: int
    ) -> db_models.LawyerRequest:
        """
        Assign a lawyer to a request and accept it on their behalf.

        Raises:
            LawyerProfileNotFoundException: If the profile doesn't exist
            LawyerRequestNotFoundException: If the request doesn't exist
        """
        profile = LawyerService.get_profile(db, profile_id)
        request = LawyerService.get_request(db, request_id)

        request.lawyer_profile_id = profile.id
        request.status = db_models.RequestStatus.ACCEPTED
        request.updated_at = utc_now()

        request = LawyerRequestRepository(db).update(request)
        logger.info(f"Lawyer request {request.id} assigned to lawyer profile {profile.id}")
        return request
