"""The Alembic revision must build the same table the ORM model describes."""

from sqlalchemy import inspect, text

from notes_service.db.base import Database
from notes_service.db.migrate import upgrade_database
from notes_service.db.models import NoteModel
from notes_service.db.services import NoteService


def test_upgrade_matches_model(tmp_path):
    url = f"sqlite:///{tmp_path / 'notes.db'}"
    upgrade_database(url)

    database = Database.from_url(url)
    try:
        inspector = inspect(database.engine)
        columns = {column["name"]: column for column in inspector.get_columns("notes")}
        model_columns = NoteModel.__table__.columns

        assert set(columns) == {column.name for column in model_columns}
        for column in model_columns:
            assert columns[column.name]["nullable"] == column.nullable, column.name

        assert inspector.get_pk_constraint("notes")["constrained_columns"] == ["id"]
        assert {index["name"] for index in inspector.get_indexes("notes")} == {
            index.name for index in NoteModel.__table__.indexes
        }

        with database.engine.connect() as connection:
            sequence = connection.execute(
                text("SELECT name FROM sqlite_master WHERE name = 'sqlite_sequence'")
            ).scalar()
        assert sequence == "sqlite_sequence"

        with database.session() as session:
            note = NoteService(session).create_note(title="t", description=None)
            assert note.id == 1
            assert note.created_at is not None
    finally:
        database.dispose()
