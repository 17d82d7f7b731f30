from .note import NoteCreate, NoteCreated, NoteRead

__all__ = ["NoteCreate", "NoteCreated", "NoteRead"]
