"""Tests for UserService."""

import pytest

import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import (
    InvalidCredentialsException,
    UserAlreadyExistsException,
    UsernameTakenException,
    UserNotFoundException,
    ValidationException,
)
from services.user_service import UserService


class TestRegisterUser:
    """Account creation."""

    def test_register_user(self, db_session):
        user = UserService.register_user(
            db_session,
            schemas.UserCreate(
                email="new@example.com",
                password="password123",
                display_name=" New Person ",
                username="new_person",
            ),
        )

        assert user.id is not None
        assert user.display_name == "New Person"
        assert user.role == db_models.UserRole.USER
        assert user.auth_provider == db_models.AuthProvider.LOCAL
        assert user.hashed_password != "password123"

    def test_duplicate_email(self, db_session, test_user):
        with pytest.raises(UserAlreadyExistsException):
            UserService.register_user(
                db_session,
                schemas.UserCreate(
                    email=test_user.email, password="password123", display_name="Dup"
                ),
            )

    def test_duplicate_email_differs_in_case(self, db_session, test_user):
        with pytest.raises(UserAlreadyExistsException):
            UserService.register_user(
                db_session,
                schemas.UserCreate(
                    email="TEST@Example.com", password="password123", display_name="Dup"
                ),
            )

    def test_duplicate_username(self, db_session, test_user):
        with pytest.raises(UsernameTakenException):
            UserService.register_user(
                db_session,
                schemas.UserCreate(
                    email="fresh@example.com",
                    password="password123",
                    display_name="Fresh",
                    username=test_user.username,
                ),
            )


class TestLogin:
    """Credential checks."""

    def test_login_returns_token(self, db_session, test_user):
        token = UserService.login(
            db_session,
            schemas.UserLogin(email=test_user.email, password="testpassword123"),
        )

        assert token.access_token
        assert token.token_type == "bearer"
        assert token.user.id == test_user.id

    def test_wrong_password(self, db_session, test_user):
        with pytest.raises(InvalidCredentialsException):
            UserService.login(
                db_session, schemas.UserLogin(email=test_user.email, password="wrong")
            )

    def test_email_case_ignored(self, db_session, test_user):
        token = UserService.login(
            db_session,
            schemas.UserLogin(email="Test@Example.com", password="testpassword123"),
        )

        assert token.user.id == test_user.id

    def test_unknown_email(self, db_session):
        with pytest.raises(InvalidCredentialsException):
            UserService.login(
                db_session,
                schemas.UserLogin(email="ghost@example.com", password="whatever"),
            )


class TestUsernames:
    """Username availability and updates."""

    def test_availability(self, db_session, test_user):
        assert UserService.is_username_available(db_session, "freshname")
        assert not UserService.is_username_available(db_session, " testuser ")

    def test_update_username(self, db_session, test_user):
        user = UserService.update_username(db_session, test_user, "renamed_1")
        assert user.username == "renamed_1"

    def test_keep_own_username(self, db_session, test_user):
        user = UserService.update_username(db_session, test_user, "testuser")
        assert user.username == "testuser"

    def test_taken_username(self, db_session, test_user, other_user):
        with pytest.raises(UsernameTakenException):
            UserService.update_username(db_session, test_user, other_user.username)

    @pytest.mark.parametrize("username", ["ab", "has space", "x" * 21, "bad-dash"])
    def test_invalid_shape(self, db_session, test_user, username):
        with pytest.raises(ValidationException):
            UserService.update_username(db_session, test_user, username)


class TestLookups:
    def test_get_user_missing(self, db_session):
        with pytest.raises(UserNotFoundException):
            UserService.get_user_by_id_or_raise(db_session, 999)

    def test_list_users(self, db_session, test_user, admin_user):
        assert len(UserService.list_users(db_session)) == 2

    def test_list_users_by_role(self, db_session, test_user, admin_user):
        admins = UserService.list_users(db_session, db_models.UserRole.ADMIN)
        assert [u.id for u in admins] == [admin_user.id]
