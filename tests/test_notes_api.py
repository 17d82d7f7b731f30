"""API-level tests for the /notes endpoints."""

from datetime import datetime

from notes_service.db.models import NoteModel


class TestCreateNote:
    """POST /notes echoes what it stored."""

    def test_creates_note(self, client):
        payload = {"title": "Meeting Notes", "description": "Discuss Q4 roadmap"}
        response = client.post("/notes", json=payload)

        assert response.status_code == 201
        assert response.json() == payload

    def test_id_and_timestamp_are_not_echoed(self, client):
        response = client.post("/notes", json={"title": "a", "description": "b"})

        assert set(response.json()) == {"title", "description"}

    def test_created_note_is_listed(self, client):
        client.post("/notes", json={"title": "Groceries", "description": "Milk, eggs"})

        notes = client.get("/notes").json()

        assert any(
            note["title"] == "Groceries" and note["description"] == "Milk, eggs"
            for note in notes
        )

    def test_missing_fields_are_accepted(self, client):
        """No validation: absent fields are stored as null."""
        response = client.post("/notes", json={"title": "Only a title"})

        assert response.status_code == 201
        assert response.json() == {"title": "Only a title", "description": None}

        response = client.post("/notes", json={})
        assert response.status_code == 201
        assert response.json() == {"title": None, "description": None}

    def test_absent_or_null_body_creates_empty_note(self, client, database):
        response = client.post("/notes")
        assert response.status_code == 201
        assert response.json() == {"title": None, "description": None}

        response = client.post(
            "/notes", content="null", headers={"content-type": "application/json"}
        )
        assert response.status_code == 201
        assert response.json() == {"title": None, "description": None}

        with database.session() as session:
            assert session.query(NoteModel).count() == 2

    def test_values_are_stored_unmodified(self, client, database):
        client.post("/notes", json={"title": "  padded  ", "description": ""})

        with database.session() as session:
            note = session.query(NoteModel).one()

        assert note.title == "  padded  "
        assert note.description == ""
        assert note.created_at is not None


class TestListNotes:
    """GET /notes returns every note, newest first."""

    def test_empty_list(self, client):
        response = client.get("/notes")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_newest_first(self, client):
        client.post("/notes", json={"title": "First", "description": "One"})
        client.post("/notes", json={"title": "Second", "description": "Two"})
        client.post("/notes", json={"title": "Third", "description": "Three"})

        response = client.get("/notes")

        assert response.status_code == 200
        titles = [note["title"] for note in response.json()]
        assert titles == ["Third", "Second", "First"]

    def test_listing_shape(self, client):
        client.post("/notes", json={"title": "First", "description": "One"})

        note = client.get("/notes").json()[0]

        assert set(note) == {"id", "title", "description"}
        assert isinstance(note["id"], int)

    def test_orders_by_creation_time_not_id(self, client, database):
        with database.session() as session:
            session.add_all(
                [
                    NoteModel(title="newest", created_at=datetime(2025, 3, 1, 12, 0, 0)),
                    NoteModel(title="oldest", created_at=datetime(2025, 1, 1, 12, 0, 0)),
                    NoteModel(title="middle", created_at=datetime(2025, 2, 1, 12, 0, 0)),
                ]
            )
            session.commit()

        titles = [note["title"] for note in client.get("/notes").json()]

        assert titles == ["newest", "middle", "oldest"]

    def test_same_timestamp_falls_back_to_id(self, client, database):
        stamp = datetime(2025, 1, 1, 12, 0, 0)
        with database.session() as session:
            session.add_all(
                [NoteModel(title=f"note-{i}", created_at=stamp) for i in range(3)]
            )
            session.commit()

        notes = client.get("/notes").json()

        assert [note["title"] for note in notes] == ["note-2", "note-1", "note-0"]
        assert [note["id"] for note in notes] == sorted(
            (note["id"] for note in notes), reverse=True
        )


def test_no_other_routes(client):
    assert client.get("/notes/1").status_code == 404
    assert client.delete("/notes").status_code == 405
