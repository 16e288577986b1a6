"""
Bearer-token authentication.

Identity comes only from a signed JWT whose subject is the user's email.
The role is read from the database on every request, so promoting or
demoting an account takes effect immediately and clients cannot claim a
role for themselves.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from models.config import settings
from models.exceptions import (
    AuthenticationException,
    InsufficientPermissionsException,
    SessionExpiredException,
)
from repositories.database import get_db
from repositories.user_repository import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def authenticate_user(db: Session, email: str, password: str) -> db_models.User | None:
    """Return the user for a correct email/password pair, else None."""
    user = UserRepository(db).get_by_email(email)
    if user is None or not user.hashed_password:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def _decode_subject(token: str) -> str:
    """
    Raises:
        AuthenticationException: If the token is expired, malformed or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.exceptions.ExpiredSignatureError:
        raise SessionExpiredException("Session expired. Please log in again.")
    except jwt.exceptions.InvalidTokenError:
        raise AuthenticationException("Could not validate credentials")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationException("Could not validate credentials")
    return str(subject)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> db_models.User:
    """
    Resolve the authenticated user.

    Raises:
        AuthenticationException: If no valid token is present or the user is gone.
    """
    if credentials is None:
        raise AuthenticationException("Authentication required")

    user = UserRepository(db).get_by_email(_decode_subject(credentials.credentials))
    if user is None:
        raise AuthenticationException("Could not validate credentials")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[db_models.User]:
    """
    Current user if authenticated, otherwise None.

    An expired token still raises so the client knows to log in again;
    a malformed token is treated as anonymous.
    """
    if credentials is None:
        return None

    try:
        email = _decode_subject(credentials.credentials)
    except SessionExpiredException:
        raise
    except AuthenticationException:
        return None

    return UserRepository(db).get_by_email(email)


async def get_admin_user(
    current_user: db_models.User = Depends(get_current_user),
) -> db_models.User:
    """
    Require the admin role.

    Raises:
        InsufficientPermissionsException: If the user is not an admin.
    """
    if not current_user.is_admin:
        raise InsufficientPermissionsException("Admin privileges required")
    return current_user


def require_self_or_admin(current_user: db_models.User, user_id: int) -> None:
    """
    Raises:
        InsufficientPermissionsException: Unless acting on one's own data or admin.
    """
    if current_user.id != user_id and not current_user.is_admin:
        raise InsufficientPermissionsException(
            "Access denied: You can only view your own data"
        )
