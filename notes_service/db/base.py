"""Database configuration and base setup for the Notes service."""

from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# Default to a local SQLite database when DATABASE_URL is not provided.
DEFAULT_DATABASE_URL = "sqlite:///./notes.db"


def _ensure_sync_driver(url: URL) -> URL:
    """Force a synchronous driver for Alembic and the ORM engine."""

    if url.drivername in ("postgresql", "postgres"):
        # The Cloud SQL connection string carries no driver; psycopg (v3) is
        # the only PostgreSQL driver installed.
        url = url.set(drivername="postgresql+psycopg")
    elif url.drivername.startswith("postgresql+"):
        # Normalize any async driver variants to psycopg (sync)
        if any(token in url.drivername for token in ("async", "aiopg")):
            url = url.set(drivername="postgresql+psycopg")
    elif url.drivername.startswith("sqlite+"):
        # Align async SQLite drivers to the synchronous default
        if "aiosqlite" in url.drivername:
            url = url.set(drivername="sqlite")

    return url


def get_database_url(raw_url: Optional[str] = None) -> str:
    """Return a database URL with a guaranteed synchronous driver."""

    url = make_url(raw_url or DEFAULT_DATABASE_URL)
    # render_as_string keeps the password; str(url) would mask it as ***
    return _ensure_sync_driver(url).render_as_string(hide_password=False)


def create_database_engine(database_url: str) -> Engine:
    """Create an engine configured for the target backend."""

    if database_url.startswith("sqlite"):
        # SQLite configuration for development/testing
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # PostgreSQL over the Cloud SQL unix socket
    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


class Database:
    """Engine and session factory built once at process start.

    Instances are passed explicitly to the API factory and to the seeder so
    the backend choice is made by whoever resolves configuration, not by a
    shared accessor.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=engine
        )

    @classmethod
    def from_url(cls, raw_url: Optional[str] = None) -> "Database":
        return cls(create_database_engine(get_database_url(raw_url)))

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        """Create all tables. Used by tests and local development."""
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        """Drop all tables. Use with caution!"""
        from . import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency to get a database session from the app's Database."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
