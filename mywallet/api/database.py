"""
Database Connection Module

Provides the store handle (engine + session factory) and per-request sessions.
"""

from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..models import Base

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Database:
    """Store handle built once at startup and disposed on shutdown."""

    def __init__(self, database_url: str):
        """Create the engine and session factory.

        Args:
            database_url: SQLAlchemy database URL
        """
        self.database_url = database_url

        if database_url in IN_MEMORY_URLS:
            # A single shared connection keeps in-memory databases alive across threads
            self.engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif database_url.startswith("sqlite"):
            self.engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
            )
        else:
            self.engine = create_engine(
                database_url,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=10,
            )

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create tables and unique indexes if they do not exist."""
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get database session as context manager.

        Yields:
            Database session
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session for FastAPI dependency injection.

    Yields:
        Database session
    """
    with request.app.state.database.session() as db:
        yield db
