"""
Integration Tests for Owner-Scoped Repositories.

Tests the note and grade record repositories against a real database.
"""

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.exceptions import NotFoundError
from studyplanner.backend.repositories.grade_record import GradeRecordRepository
from studyplanner.backend.repositories.note import NoteRepository
from studyplanner.backend.repositories.user import UserRepository
from studyplanner.backend.schemas.note import NoteView


class TestOwnerScoping:
    """Tests for the owner filter on every query."""

    @pytest.mark.asyncio
    async def test_create_sets_owner(self, db_session: AsyncSession):
        repo = NoteRepository(db_session, "alice")

        note = await repo.create(title="T", content="C", owner_id="mallory")

        assert note.owner_id == "alice"

    @pytest.mark.asyncio
    async def test_foreign_rows_invisible(self, db_session: AsyncSession, make_note):
        note = await make_note("alice")
        bob_repo = NoteRepository(db_session, "bob")

        assert await bob_repo.get_by_id_or_none(note.id) is None
        assert await bob_repo.exists(note.id) is False
        assert await bob_repo.get_all() == []

        with pytest.raises(NotFoundError, match="Note not found"):
            await bob_repo.update(note.id, title="x")
        with pytest.raises(NotFoundError):
            await bob_repo.delete(note.id)

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, db_session: AsyncSession, make_note):
        note = await make_note("alice", title="Before", content="Body")
        repo = NoteRepository(db_session, "alice")

        updated = await repo.update(note.id, title="After")

        assert updated.title == "After"
        assert updated.content == "Body"


class TestNoteViews:
    """Tests for NoteRepository.find_by_view."""

    @pytest.mark.asyncio
    async def test_tag_filter_ignored_outside_default_view(self, db_session: AsyncSession, make_note):
        await make_note("alice", title="cs", course_tag="CS", is_archived=True)
        await make_note("alice", title="math", course_tag="MATH", is_archived=True)
        repo = NoteRepository(db_session, "alice")

        archived = await repo.find_by_view(NoteView.ARCHIVE, course_tag="CS")

        assert sorted(note.title for note in archived) == ["cs", "math"]

    @pytest.mark.asyncio
    async def test_pinned_trashed_note_listed_first_in_trash(self, db_session: AsyncSession, make_note):
        await make_note("alice", title="newer", age_minutes=0, is_deleted=True)
        await make_note("alice", title="pinned", age_minutes=60, is_deleted=True, is_pinned=True)
        repo = NoteRepository(db_session, "alice")

        trashed = await repo.find_by_view(NoteView.DELETED)

        assert [note.title for note in trashed] == ["pinned", "newer"]

    @pytest.mark.asyncio
    async def test_unknown_view_raises(self, db_session: AsyncSession, make_note):
        await make_note("alice", title="active")
        repo = NoteRepository(db_session, "alice")

        with pytest.raises(ValueError, match="starred"):
            await repo.find_by_view("starred")

    @pytest.mark.asyncio
    async def test_view_value_accepted(self, db_session: AsyncSession, make_note):
        await make_note("alice", title="archived", is_archived=True)
        repo = NoteRepository(db_session, "alice")

        assert [note.title for note in await repo.find_by_view("archive")] == ["archived"]


class TestGradeRecords:
    """Tests for GradeRecordRepository."""

    @pytest.mark.asyncio
    async def test_newest_first(self, db_session: AsyncSession, make_grade_record):
        await make_grade_record("alice", course="older", created_at=datetime(2023, 9, 1))
        await make_grade_record("alice", course="newer", created_at=datetime(2024, 2, 1))
        repo = GradeRecordRepository(db_session, "alice")

        records = await repo.get_all_newest_first()

        assert [record.course for record in records] == ["newer", "older"]


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_lookup_by_user_id(self, db_session: AsyncSession):
        repo = UserRepository(db_session)
        await repo.create(user_id="alice", email="alice@example.edu")

        assert await repo.exists_by_user_id("alice") is True
        assert await repo.exists_by_user_id("bob") is False
        assert (await repo.get_by_user_id("alice")).email == "alice@example.edu"
