"""
Integration Tests for Note Service.

Domain-level behaviour of create/save/load/remove/update against a real
in-memory store. Each call runs in its own committed session, the way
the API runs them.
"""

import uuid
from datetime import datetime, timezone

import pytest

from notedesk.core.database import Database
from notedesk.core.utils import now_ms
from notedesk.schemas.note import NoteSaveRequest
from notedesk.services.note import NoteService


async def _call(database: Database, method: str, *args):
    """Run one service call in its own transaction."""
    async with database.session() as session:
        return await getattr(NoteService(session), method)(*args)


class TestCreate:
    """Tests for note creation."""

    @pytest.mark.asyncio
    async def test_created_note_shape(self, database):
        note = await _call(database, "create")

        assert str(uuid.UUID(note.id)) == note.id
        assert note.title == "Untitled"
        assert note.content == ""
        assert note.created_at == note.updated_at

    @pytest.mark.asyncio
    async def test_round_trip(self, database):
        created = await _call(database, "create")
        fetched = await _call(database, "get_by_id", created.id)

        assert fetched is not None
        for field in ("id", "title", "content", "created_at", "updated_at"):
            assert getattr(fetched, field) == getattr(created, field)

    @pytest.mark.asyncio
    async def test_two_notes_distinct_and_ordered(self, database):
        first = await _call(database, "create")
        second = await _call(database, "create")

        assert first.id != second.id
        assert first.created_at <= second.created_at


class TestUpdateContent:
    """Tests for content updates."""

    @pytest.mark.asyncio
    async def test_last_write_wins_and_time_moves_forward(self, database):
        note = await _call(database, "create")

        await _call(database, "update_content", note.id, "c1")
        after_first = await _call(database, "get_by_id", note.id)
        await _call(database, "update_content", note.id, "c2")
        after_second = await _call(database, "get_by_id", note.id)

        assert after_second.content == "c2"
        assert after_second.updated_at >= after_first.updated_at
        assert after_second.created_at == note.created_at
        assert after_second.title == "Untitled"

    @pytest.mark.asyncio
    async def test_unknown_id_leaves_store_untouched(self, database):
        await _call(database, "update_content", "missing", "text")

        assert await _call(database, "get_by_id", "missing") is None


class TestDelete:
    """Tests for deletion."""

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, database):
        note = await _call(database, "create")

        assert await _call(database, "delete", note.id) == 1
        assert await _call(database, "get_by_id", note.id) is None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, database):
        assert await _call(database, "delete", "never-existed") == 0
        assert await _call(database, "delete", "never-existed") == 0


class TestSave:
    """Tests for the save path."""

    @pytest.mark.asyncio
    async def test_save_updates_existing_content(self, database):
        note = await _call(database, "create")

        result = await _call(
            database,
            "save",
            NoteSaveRequest(id=note.id, content="hello", updatedAt=now_ms()),
        )

        stored = await _call(database, "get_by_id", note.id)
        assert result.success is True
        assert result.id == note.id
        assert stored.content == "hello"
        assert stored.title == "Untitled"
        assert stored.created_at == note.created_at

    @pytest.mark.asyncio
    async def test_save_persists_supplied_title(self, database):
        note = await _call(database, "create")

        await _call(database, "save", NoteSaveRequest(id=note.id, title="Renamed", content="x"))

        assert (await _call(database, "get_by_id", note.id)).title == "Renamed"

    @pytest.mark.asyncio
    async def test_save_unknown_id_inserts(self, database):
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        result = await _call(
            database,
            "save",
            NoteSaveRequest(id=1704164645000, title="Legacy", content="body", createdAt=created),
        )

        assert result.id == "1704164645000"
        loaded = await _call(database, "load")
        assert len(loaded) == 1
        assert loaded[0].id == 1704164645000
        assert loaded[0].title == "Legacy"
        assert loaded[0].created_at == created

    @pytest.mark.asyncio
    async def test_saved_note_visible_canonically(self, database):
        await _call(database, "save", NoteSaveRequest(id=7))

        note = await _call(database, "get_by_id", "7")
        assert note.title == ""
        assert note.content == ""
        assert note.created_at <= note.updated_at


class TestLoadAndRemove:
    """Tests for the legacy load and remove paths."""

    @pytest.mark.asyncio
    async def test_load_empty(self, database):
        assert await _call(database, "load") == []

    @pytest.mark.asyncio
    async def test_load_keeps_uuid_ids_as_strings(self, database):
        note = await _call(database, "create")

        loaded = await _call(database, "load")

        assert loaded[0].id == note.id
        assert loaded[0].created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_remove_by_numeric_id(self, database):
        await _call(database, "save", NoteSaveRequest(id=123, content="x"))

        result = await _call(database, "remove", 123)

        assert result.success is True
        assert result.deleted is True
        assert await _call(database, "load") == []

    @pytest.mark.asyncio
    async def test_remove_missing_reports_nothing_deleted(self, database):
        result = await _call(database, "remove", 999)

        assert result.success is True
        assert result.deleted is False
