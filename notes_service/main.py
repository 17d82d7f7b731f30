"""
Main entry point for the Notes API.
"""

from fastapi import FastAPI

from .api import create_app
from .config import get_settings
from .db.base import Database
from .logging_config import configure_logging


def build_app() -> FastAPI:
    """Resolve settings once and wire the storage client into the app."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    return create_app(Database.from_url(settings.database_url), settings)


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "notes_service.main:build_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.api_workers,
    )


if __name__ == "__main__":
    run()
