"""Authentication router endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.rate_limiter import limiter
from repositories.database import get_db
from services import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=schemas.RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit("3/minute")
def register(
    request: Request, user: schemas.UserCreate, db: Session = Depends(get_db)
) -> schemas.RegisterResponse:
    """
    Register a new local account. Rate limited to 3 per minute.

    Duplicate emails and usernames return 409.
    """
    created = UserService.register_user(db, user)
    return schemas.RegisterResponse(user=schemas.UserResponse.model_validate(created))


@router.post("/login", response_model=schemas.Token)
@limiter.limit("5/minute")
def login(
    request: Request, credentials: schemas.UserLogin, db: Session = Depends(get_db)
) -> schemas.Token:
    """Exchange email and password for a bearer token. Rate limited to 5 per minute."""
    return UserService.login(db, credentials)


@router.get("/me", response_model=schemas.UserResponse)
async def read_users_me(
    current_user: db_models.User = Depends(auth.get_current_user),
) -> db_models.User:
    return current_user


@router.post("/check-username", response_model=schemas.UsernameCheckResponse)
def check_username(
    body: schemas.UsernameCheckRequest, db: Session = Depends(get_db)
) -> schemas.UsernameCheckResponse:
    available = UserService.is_username_available(db, body.username)
    return schemas.UsernameCheckResponse(
        available=available,
        message="Username is available" if available else "Username is already taken",
    )


@router.post("/update-username", response_model=schemas.UsernameUpdateResponse)
def update_username(
    body: schemas.UsernameUpdateRequest,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> schemas.UsernameUpdateResponse:
    user = UserService.update_username(db, current_user, body.username)
    return schemas.UsernameUpdateResponse(
        message="Username updated successfully",
        user=schemas.UserResponse.model_validate(user),
    )
