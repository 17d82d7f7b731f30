"""Test configuration and fixtures."""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from notes_service.api import create_app
from notes_service.config import Environment, Settings
from notes_service.db.base import Database, create_database_engine


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """In-memory SQLite database with the schema created."""
    db = Database(create_database_engine("sqlite:///:memory:"))
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment=Environment.DEVELOPMENT,
        database_url="sqlite:///:memory:",
        log_format="console",
    )


@pytest.fixture
def client(database: Database, settings: Settings) -> TestClient:
    """API client wired to the in-memory database."""
    return TestClient(create_app(database, settings))
