"""
FastAPI application exposing the notes endpoints.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import List, Optional

import structlog
from fastapi import Body, Depends, FastAPI, status
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .db.base import Database, get_db
from .db.services import NoteService
from .schemas.note import NoteCreate, NoteCreated, NoteRead

logger = structlog.get_logger()


def create_app(database: Database, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around an already constructed ``Database``."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info(
            "Starting Notes API",
            environment=settings.environment.value,
            dialect=database.dialect,
            digest=settings.digest,
        )
        yield
        logger.info("Shutting down Notes API")
        database.dispose()
        logger.info("Shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="Create and list notes",
        version=importlib.metadata.version("notes-service"),
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.settings = settings

    @app.post(
        "/notes",
        response_model=NoteCreated,
        status_code=status.HTTP_201_CREATED,
        tags=["notes"],
    )
    def create_note(
        payload: Optional[NoteCreate] = Body(None),
        db: Session = Depends(get_db),
    ) -> NoteCreated:
        """Create a note and echo back its title and description.

        An absent or null body is treated like an empty object.
        """
        payload = payload or NoteCreate()
        note = NoteService(db).create_note(
            title=payload.title, description=payload.description
        )
        logger.info("Note created", note_id=note.id)
        return NoteCreated(title=note.title, description=note.description)

    @app.get("/notes", response_model=List[NoteRead], tags=["notes"])
    def list_notes(db: Session = Depends(get_db)) -> List[NoteRead]:
        """List all notes, newest first."""
        return [NoteRead.model_validate(note) for note in NoteService(db).list_notes()]

    return app
