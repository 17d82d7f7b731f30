"""
Database services for the Notes service.
"""

from typing import Iterable, List, Optional

from sqlalchemy import delete, desc, func, select, text
from sqlalchemy.orm import Session

from .models import NoteModel


class NoteService:
    """Service for managing notes in the database."""

    def __init__(self, db: Session):
        self.db = db

    def create_note(
        self, title: Optional[str] = None, description: Optional[str] = None
    ) -> NoteModel:
        """Create a new note. Values are stored exactly as received."""
        db_note = NoteModel(title=title, description=description)

        self.db.add(db_note)
        self.db.commit()
        self.db.refresh(db_note)
        return db_note

    def create_notes(self, notes: Iterable[dict]) -> int:
        """Insert several notes in one transaction and return how many."""
        rows = [
            NoteModel(title=note.get("title"), description=note.get("description"))
            for note in notes
        ]
        self.db.add_all(rows)
        self.db.commit()
        return len(rows)

    def list_notes(self) -> List[NoteModel]:
        """Get all notes, newest first.

        Notes sharing a creation timestamp fall back to id order so the
        listing is deterministic.
        """
        return list(
            self.db.scalars(
                select(NoteModel).order_by(
                    desc(NoteModel.created_at), desc(NoteModel.id)
                )
            )
        )

    def count_notes(self) -> int:
        return self.db.scalar(select(func.count()).select_from(NoteModel)) or 0

    def delete_all_notes(self, reset_identity: bool = True) -> None:
        """Remove every note and optionally restart the id sequence at 1."""
        table = NoteModel.__tablename__
        dialect = self.db.get_bind().dialect.name

        if reset_identity and dialect == "postgresql":
            self.db.execute(text(f"TRUNCATE TABLE {table} RESTART IDENTITY"))
        else:
            self.db.execute(delete(NoteModel))
            if reset_identity and dialect == "sqlite":
                self.db.execute(
                    text("DELETE FROM sqlite_sequence WHERE name = :name"),
                    {"name": table},
                )
        self.db.commit()
