"""
SQLAlchemy models for the Notes service.
"""

from sqlalchemy import Column, DateTime, Index, Integer, Text
from sqlalchemy.sql import func

from .base import Base


class NoteModel(Base):
    """SQLAlchemy model for notes."""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_notes_created_at", "created_at"),
        # Keep SQLite ids monotonic like a PostgreSQL sequence
        {"sqlite_autoincrement": True},
    )
