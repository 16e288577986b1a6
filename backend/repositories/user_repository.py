"""
User repository for database operations.
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class UserRepository(BaseRepository[db_models.User]):
    """Repository for reporters, lawyers and admins."""

    def __init__(self, db: Session):
        super().__init__(db_models.User, db)

    def get_by_email(self, email: str) -> Optional[db_models.User]:
        """
        Look up an account by email, ignoring case and surrounding spaces.

        Args:
            email: Email as typed at login or registration

        Returns:
            User if found, None otherwise
        """
        return (
            self.db.query(db_models.User)
            .filter(func.lower(db_models.User.email) == email.strip().lower())
            .first()
        )

    def get_by_username(self, username: str) -> Optional[db_models.User]:
        """BeAware usernames are case-sensitive."""
        return (
            self.db.query(db_models.User)
            .filter(db_models.User.username == username)
            .first()
        )

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def username_exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def list_users(
        self, role: Optional[db_models.UserRole] = None
    ) -> List[db_models.User]:
        """Accounts oldest first, optionally limited to one role."""
        query = self.db.query(db_models.User)
        if role is not None:
            query = query.filter(db_models.User.role == role)
        return query.order_by(db_models.User.id).all()
