"""Apply Alembic migrations without needing an alembic.ini on disk."""

from pathlib import Path

from alembic import command
from alembic.config import Config

from .base import get_database_url

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def alembic_config(database_url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation treats % specially (url-encoded passwords)
    config.set_main_option(
        "sqlalchemy.url", get_database_url(database_url).replace("%", "%%")
    )
    return config


def upgrade_database(database_url: str, revision: str = "head") -> None:
    """Upgrade the schema at ``database_url`` to ``revision``."""
    command.upgrade(alembic_config(database_url), revision)
