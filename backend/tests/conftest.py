"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["CORS_ORIGINS"] = '["http://localhost:3000"]'
os.environ["ADMIN_EMAIL"] = "admin@test.com"
os.environ["ADMIN_PASSWORD"] = "TestAdmin123!"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_PROVIDER"] = "console"
os.environ["PERPLEXITY_API_KEY"] = ""

from authentication.auth import create_access_token, get_password_hash  # noqa: E402
from repositories.database import Base, get_db, register_sqlite_functions  # noqa: E402
import models.schemas as schemas  # noqa: E402
import repositories.db_models as db_models  # noqa: E402

# Test database engine (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
register_sqlite_functions(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh in-memory database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session."""
    return db_session


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with overridden database dependency."""
    from main import app
    from helpers.rate_limiter import limiter

    limiter.reset()

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch) -> Path:
    """Point proof file storage at a temporary directory."""
    from models.config import settings

    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(target))
    return target


def _make_user(db_session, email: str, username: str, display_name: str, role):
    user = db_models.User(
        email=email,
        username=username,
        display_name=display_name,
        hashed_password=get_password_hash("testpassword123"),
        role=role,
        auth_provider=db_models.AuthProvider.LOCAL,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session) -> db_models.User:
    """Create a regular reporter."""
    return _make_user(
        db_session, "test@example.com", "testuser", "Test User", db_models.UserRole.USER
    )


@pytest.fixture
def other_user(db_session) -> db_models.User:
    """Create another regular user (for permission tests)."""
    return _make_user(
        db_session,
        "other@example.com",
        "otheruser",
        "Other User",
        db_models.UserRole.USER,
    )


@pytest.fixture
def admin_user(db_session) -> db_models.User:
    """Create an admin user."""
    return _make_user(
        db_session,
        "admin@example.com",
        "adminuser",
        "Admin User",
        db_models.UserRole.ADMIN,
    )


@pytest.fixture
def auth_headers(test_user) -> dict:
    """Get authentication headers for test user."""
    token = create_access_token(data={"sub": test_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user) -> dict:
    token = create_access_token(data={"sub": other_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers(admin_user) -> dict:
    """Get authentication headers for admin user."""
    token = create_access_token(data={"sub": admin_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def report_payload():
    """Factory for a valid report submission body (snake_case fields)."""

    def _payload(scam_type: str = "phone", identifier: str = "555-0100", **extra):
        field = {
            "phone": "scam_phone_number",
            "email": "scam_email",
            "business": "scam_business_name",
        }[scam_type]
        body = {
            "scam_type": scam_type,
            field: identifier,
            "incident_date": "2024-03-01",
            "description": "robocall",
        }
        body.update(extra)
        return body

    return _payload


@pytest.fixture
def create_report(db_session, test_user, report_payload):
    """Factory fixture submitting reports through the service layer."""
    from services.scam_report_service import ScamReportService

    def _create(
        scam_type: str = "phone",
        identifier: str = "555-0100",
        reporter: db_models.User | None = None,
        proof: schemas.ProofFileMetadata | None = None,
        **extra,
    ) -> db_models.ScamReport:
        data = schemas.ScamReportCreate(**report_payload(scam_type, identifier, **extra))
        return ScamReportService.create_report(
            db_session, data, reporter or test_user, proof
        )

    return _create


@pytest.fixture
def test_report(create_report) -> db_models.ScamReport:
    """A published, unverified phone scam report."""
    return create_report()
