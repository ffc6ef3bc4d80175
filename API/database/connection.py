"""
Database engine, session factory and FastAPI session dependency.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import settings
from .base import Base


class DatabaseConnection:
    """Owns the engine and the session factory."""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = create_engine(
            database_url,
            connect_args=self._connect_args(),
            pool_pre_ping=True,
            echo=False,
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)

    def _connect_args(self) -> dict:
        if self.database_url.startswith("sqlite"):
            return {"check_same_thread": False}
        return {}

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Session as a context manager (scripts, startup hooks)."""
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def create_tables(self):
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        Base.metadata.drop_all(bind=self.engine)


db = DatabaseConnection(settings.database_url)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    session = db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db():
    """Create all tables that do not exist yet."""
    # models must be registered on Base.metadata first
    from . import models  # noqa: F401
    db.create_tables()


def reset_db():
    """Drop and recreate every table. Tests and local dev only."""
    from . import models  # noqa: F401
    db.drop_tables()
    db.create_tables()
