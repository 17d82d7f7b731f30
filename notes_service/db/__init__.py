"""
Database package for the Notes service.
"""

from .base import Base, Database, get_database_url, get_db
from .models import NoteModel
from .services import NoteService

__all__ = [
    "Base",
    "Database",
    "get_database_url",
    "get_db",
    "NoteModel",
    "NoteService",
]
