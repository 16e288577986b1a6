"""
Base repository class providing common database operations.

Repositories never commit on their own except through the explicit
`create`/`update`/`delete`/`commit` helpers, so services can group several
writes into one transaction.
"""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from repositories.database import Base

T = TypeVar("T", bound=Base)  # type: ignore[type-arg]


class BaseRepository(Generic[T]):
    """
    Common CRUD operations over a single SQLAlchemy model.
    """

    def __init__(self, model: type[T], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, id: int) -> T | None:
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_all(self, skip: int = 0, limit: int = 100) -> list[T]:
        """Entities in primary key order."""
        return (
            self.db.query(self.model)
            .order_by(self.model.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def add(self, entity: T) -> T:
        """
        Stage an entity in the current transaction and flush it.

        Flushing assigns the primary key without committing, which lets
        a caller link rows together before a single commit.

        Returns:
            The same entity, now carrying its ID.
        """
        self.db.add(entity)
        self.db.flush()
        return entity

    def create(self, entity: T) -> T:
        """Add, commit and refresh an entity."""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: T) -> T:
        """Commit pending changes on an entity and reload it."""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        self.db.commit()

    def count(self) -> int:
        return self.db.query(self.model).count()

    def commit(self) -> None:
        self.db.commit()

    def flush(self) -> None:
        self.db.flush()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, entity: T) -> None:
        self.db.refresh(entity)
