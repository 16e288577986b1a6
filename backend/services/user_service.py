"""
User Service

Handles registration, login and BeAware usernames.
"""

import re
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import (
    InvalidCredentialsException,
    UserAlreadyExistsException,
    UsernameTakenException,
    UserNotFoundException,
    ValidationException,
)
from repositories.user_repository import UserRepository

USERNAME_RE = re.compile(schemas.USERNAME_PATTERN)


class UserService:
    """Service for managing user accounts."""

    @staticmethod
    def register_user(db: Session, data: schemas.UserCreate) -> db_models.User:
        """
        Create a local account.

        Args:
            db: Database session
            data: Registration data

        Returns:
            Created user

        Raises:
            UserAlreadyExistsException: If the email is registered
            UsernameTakenException: If the username is in use
        """
        user_repo = UserRepository(db)

        if user_repo.email_exists(data.email):
            raise UserAlreadyExistsException("User with this email already exists")
        if data.username and user_repo.username_exists(data.username):
            raise UsernameTakenException(
                "This BeAware username is already taken. Please choose a different one."
            )

        user = db_models.User(
            email=data.email,
            hashed_password=auth.get_password_hash(data.password),
            display_name=data.display_name.strip(),
            username=data.username,
            role=db_models.UserRole.USER,
            auth_provider=db_models.AuthProvider.LOCAL,
        )
        try:
            user = user_repo.create(user)
        except IntegrityError:
            # Lost a race with a concurrent registration
            user_repo.rollback()
            raise UserAlreadyExistsException("User with this email already exists")

        logger.info(f"User {user.id} registered")
        return user

    @staticmethod
    def login(db: Session, data: schemas.UserLogin) -> schemas.Token:
        """
        Raises:
            InvalidCredentialsException: If email or password is wrong
        """
        user = auth.authenticate_user(db, data.email, data.password)
        if user is None:
            logger.info("Failed login attempt")
            raise InvalidCredentialsException("Invalid credentials")

        token = auth.create_access_token(data={"sub": user.email})
        return schemas.Token(
            access_token=token,
            user=schemas.UserResponse.model_validate(user),
        )

    @staticmethod
    def is_username_available(db: Session, username: str) -> bool:
        return not UserRepository(db).username_exists(username.strip())

    @staticmethod
    def update_username(
        db: Session, user: db_models.User, username: str
    ) -> db_models.User:
        """
        Set the caller's BeAware username.

        Raises:
            ValidationException: If the username has the wrong shape
            UsernameTakenException: If another account uses it
        """
        username = username.strip()
        if not USERNAME_RE.match(username):
            raise ValidationException(
                "Username must be 3-20 letters, numbers or underscores", ["username"]
            )

        holder = UserRepository(db).get_by_username(username)
        if holder is not None and holder.id != user.id:
            raise UsernameTakenException("Username is already taken")

        user.username = username
        return UserRepository(db).update(user)

    @staticmethod
    def get_user_by_id_or_raise(db: Session, user_id: int) -> db_models.User:
        """
        Raises:
            UserNotFoundException: If user doesn't exist
        """
        user = UserRepository(db).get_by_id(user_id)
        if user is None:
            raise UserNotFoundException("User not found")
        return user

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[db_models.User]:
        return UserRepository(db).get_by_email(email)

    @staticmethod
    def list_users(
        db: Session, role: Optional[db_models.UserRole] = None
    ) -> List[db_models.User]:
        return UserRepository(db).list_users(role)
