"""Initialize the database with the bootstrap admin account."""

from typing import Optional

from sqlalchemy.orm import Session

from authentication.auth import get_password_hash
from models.config import settings
from repositories.database import Base, SessionLocal, engine
from repositories.db_models import AuthProvider, User, UserRole
from repositories.user_repository import UserRepository


def ensure_admin(db: Session) -> Optional[User]:
    """
    Create the admin account from ADMIN_EMAIL / ADMIN_PASSWORD if missing.

    An existing account with that email is promoted to admin. Returns None
    when the settings are empty.
    """
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        print("[SKIP] ADMIN_EMAIL / ADMIN_PASSWORD not set; no admin created")
        return None

    admin = UserRepository(db).get_by_email(settings.ADMIN_EMAIL)
    if admin is not None:
        if admin.role != UserRole.ADMIN:
            admin.role = UserRole.ADMIN
            db.commit()
            print(f"[OK] Existing user {admin.email} promoted to admin")
        return admin

    admin = User(
        email=settings.ADMIN_EMAIL,
        username="admin",
        display_name="Administrator",
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        auth_provider=AuthProvider.LOCAL,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    print("[OK] Admin user created")
    print(f"  Email: {settings.ADMIN_EMAIL}")
    print("  Password: (from ADMIN_PASSWORD in .env)")
    print("  IMPORTANT: Change this password in production!")
    return admin


def init_db() -> None:
    """Create tables and seed the admin account."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_admin(db)
        print("\n[OK] Database initialization complete!")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
