"""
Engine, session factory and declarative base.
"""

import re

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool

from models.config import settings

_NON_DIGITS = re.compile(r"\D")


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Create the database engine for the configured URL.

    SQLite gets NullPool (one connection per session) with foreign keys
    switched on; anything else gets a tuned QueuePool.
    """
    url = database_url or settings.DATABASE_URL

    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )
        enable_sqlite_foreign_keys(sqlite_engine)
        register_sqlite_functions(sqlite_engine)
        return sqlite_engine

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def digits_only(value: str | None) -> str | None:
    return None if value is None else _NON_DIGITS.sub("", value)


def register_sqlite_functions(target: Engine) -> None:
    """Expose digits_only() to SQL. PostgreSQL gets the same via regexp_replace."""

    @event.listens_for(target, "connect")
    def _register(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.create_function("digits_only", 1, digits_only, deterministic=True)


engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a request-scoped session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
