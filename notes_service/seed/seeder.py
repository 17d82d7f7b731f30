"""
Database seeding for the notes table.

Outside staging the table is cleared and its id sequence restarted before the
fixtures are inserted. Staging is shared with people inspecting its data, so
there the fixtures are appended and nothing is deleted.

The routine is meant to run as a single one-shot job; running it twice at
the same time against the same database is not guarded against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import structlog
from faker import Faker

from ..config import Environment, Settings
from ..db.base import Database
from ..db.services import NoteService

logger = structlog.get_logger()


@dataclass
class SeedResult:
    """Outcome of one seeding run."""

    environment: Environment
    cleared: bool
    inserted: int
    total: int


def generate_notes(count: int, faker: Optional[Faker] = None) -> List[Dict[str, str]]:
    """Build ``count`` fake notes."""
    faker = faker or Faker()
    return [
        {"title": faker.sentence(), "description": faker.paragraph()}
        for _ in range(count)
    ]


def seed_database(
    database: Database,
    environment: Environment,
    count: int = 5,
    faker: Optional[Faker] = None,
) -> SeedResult:
    """Populate the notes table with ``count`` generated notes."""
    cleared = environment is not Environment.STAGING

    with database.session() as session:
        service = NoteService(session)

        if cleared:
            logger.info("Clearing existing notes", environment=environment.value)
            service.delete_all_notes(reset_identity=True)

        inserted = service.create_notes(generate_notes(count, faker))
        total = service.count_notes()

    logger.info(
        "Inserted fake notes",
        environment=environment.value,
        inserted=inserted,
        total=total,
    )
    return SeedResult(
        environment=environment, cleared=cleared, inserted=inserted, total=total
    )


def run_seed(
    settings: Settings,
    database: Optional[Database] = None,
    count: Optional[int] = None,
) -> int:
    """Seed the configured database and return a process exit code.

    The database connection is always released, whether seeding succeeds or
    not.
    """
    logger.info("Starting database seed", environment=settings.environment.value)
    try:
        database = database or Database.from_url(settings.database_url)
        seed_database(
            database,
            settings.environment,
            count=settings.seed_count if count is None else count,
        )
        return 0
    except Exception:
        logger.exception("Error occurred during database seeding")
        return 1
    finally:
        if database is not None:
            database.dispose()
            logger.info("Seeding finished. Database connection closed.")
