"""
Integration Tests for Notes API.

Tests the notes API endpoints with a real database.
"""

import pytest
from httpx import AsyncClient

NOTES = "/api/v1/notes"


def titles(data: dict) -> list[str]:
    return [note["title"] for note in data["data"]]


class TestCreateNote:
    """Tests for POST /api/v1/notes."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, client: AsyncClient, alice, api):
        """Should create an active, unpinned note owned by the caller."""
        response = await client.post(
            NOTES,
            json={"title": "Recursion", "content": "Base case first", "course_tag": "CS101"},
            headers=alice,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["title"] == "Recursion"
        assert data["course_tag"] == "CS101"
        assert data["owner_id"] == "alice"
        assert data["is_pinned"] is False
        assert data["is_archived"] is False
        assert data["is_deleted"] is False
        assert "id" in data
        assert "created_at" in data

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"course_tag": ""}, {"course_tag": "   "}])
    async def test_create_note_defaults_course_tag(self, client: AsyncClient, alice, api, payload):
        """Should tag the note General when the tag is missing or blank."""
        response = await client.post(
            NOTES,
            json={"title": "Misc", "content": "Body", **payload},
            headers=alice,
        )

        assert api.assert_success(response, 201)["data"]["course_tag"] == "General"

    @pytest.mark.asyncio
    async def test_create_note_missing_content_fails(self, client: AsyncClient, alice, api):
        response = await client.post(NOTES, json={"title": "No body"}, headers=alice)

        api.assert_validation_error(response, field="content")

    @pytest.mark.asyncio
    async def test_create_note_empty_title_fails(self, client: AsyncClient, alice, api):
        response = await client.post(NOTES, json={"title": "", "content": "x"}, headers=alice)

        api.assert_validation_error(response, field="title")

    @pytest.mark.asyncio
    async def test_create_note_blank_title_fails(self, client: AsyncClient, alice, api):
        """Should reject whitespace-only titles in the service layer."""
        response = await client.post(NOTES, json={"title": "  ", "content": "x"}, headers=alice)

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")

    @pytest.mark.asyncio
    async def test_create_note_requires_token(self, client: AsyncClient, api):
        """Should return 401 without a bearer token."""
        response = await client.post(NOTES, json={"title": "T", "content": "C"})

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_create_note_rejects_bad_token(self, client: AsyncClient, api):
        response = await client.post(
            NOTES,
            json={"title": "T", "content": "C"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")


class TestListNotes:
    """Tests for GET /api/v1/notes."""

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, client: AsyncClient, alice, api):
        response = await client.get(NOTES, headers=alice)

        assert api.assert_success(response)["data"] == []

    @pytest.mark.asyncio
    async def test_pinned_first_then_newest(self, client: AsyncClient, alice, api, make_note):
        """Should order pinned notes first, each group newest first."""
        await make_note("alice", title="old", age_minutes=30)
        await make_note("alice", title="old-pinned", age_minutes=20, is_pinned=True)
        await make_note("alice", title="new", age_minutes=10)
        await make_note("alice", title="new-pinned", age_minutes=0, is_pinned=True)

        response = await client.get(NOTES, headers=alice)

        assert titles(api.assert_success(response)) == [
            "new-pinned",
            "old-pinned",
            "new",
            "old",
        ]

    @pytest.mark.asyncio
    async def test_views_are_mutually_exclusive(self, client: AsyncClient, alice, api, make_note):
        """Should show each note in exactly one view."""
        await make_note("alice", title="active")
        await make_note("alice", title="archived", is_archived=True)
        await make_note("alice", title="trashed", is_deleted=True)
        await make_note("alice", title="archived-trashed", is_archived=True, is_deleted=True)

        default = await client.get(NOTES, headers=alice)
        archive = await client.get(NOTES, params={"view": "archive"}, headers=alice)
        deleted = await client.get(NOTES, params={"view": "deleted"}, headers=alice)

        assert titles(api.assert_success(default)) == ["active"]
        assert titles(api.assert_success(archive)) == ["archived"]
        assert sorted(titles(api.assert_success(deleted))) == ["archived-trashed", "trashed"]

    @pytest.mark.asyncio
    async def test_filter_default_view_by_tag(self, client: AsyncClient, alice, api, make_note):
        await make_note("alice", title="math", course_tag="MATH")
        await make_note("alice", title="cs", course_tag="CS")
        await make_note("alice", title="archived-math", course_tag="MATH", is_archived=True)

        response = await client.get(NOTES, params={"course_tag": "MATH"}, headers=alice)

        assert titles(api.assert_success(response)) == ["math"]

    @pytest.mark.asyncio
    async def test_unknown_view_rejected(self, client: AsyncClient, alice, api):
        response = await client.get(NOTES, params={"view": "starred"}, headers=alice)

        api.assert_validation_error(response, field="view")

    @pytest.mark.asyncio
    async def test_only_own_notes_listed(self, client: AsyncClient, alice, bob, api, make_note):
        await make_note("alice", title="alice-note")
        await make_note("bob", title="bob-note")

        response = await client.get(NOTES, headers=bob)

        assert titles(api.assert_success(response)) == ["bob-note"]


class TestTags:
    """Tests for GET /api/v1/notes/tags."""

    @pytest.mark.asyncio
    async def test_distinct_active_tags(self, client: AsyncClient, alice, api, make_note):
        """Should list each active tag once, skipping archived, trashed and empty."""
        await make_note("alice", course_tag="MATH")
        await make_note("alice", course_tag="MATH")
        await make_note("alice", course_tag="CS")
        await make_note("alice", course_tag="")
        await make_note("alice", course_tag="ART", is_archived=True)
        await make_note("alice", course_tag="BIO", is_deleted=True)
        await make_note("bob", course_tag="LAW")

        response = await client.get(f"{NOTES}/tags", headers=alice)

        assert api.assert_success(response)["data"] == ["CS", "MATH"]


class TestGetNote:
    """Tests for GET /api/v1/notes/{note_id}."""

    @pytest.mark.asyncio
    async def test_get_note_success(self, client: AsyncClient, alice, api, make_note):
        note = await make_note("alice", title="Get Test")

        response = await client.get(f"{NOTES}/{note.id}", headers=alice)

        data = api.assert_success(response)["data"]
        assert data["id"] == note.id
        assert data["title"] == "Get Test"

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, client: AsyncClient, alice, api):
        response = await client.get(f"{NOTES}/nonexistent-id", headers=alice)

        api.assert_error(response, 404, "RES_NOT_FOUND")

    @pytest.mark.asyncio
    async def test_other_owners_note_is_not_found(self, client: AsyncClient, bob, api, make_note):
        """Should answer exactly as for a missing note."""
        note = await make_note("alice")

        foreign = await client.get(f"{NOTES}/{note.id}", headers=bob)
        missing = await client.get(f"{NOTES}/nonexistent-id", headers=bob)

        api.assert_error(foreign, 404, "RES_NOT_FOUND")
        assert foreign.json()["error"] == missing.json()["error"]


class TestUpdateNote:
    """Tests for PATCH /api/v1/notes/{note_id}."""

    @pytest.mark.asyncio
    async def test_merge_patch_keeps_other_fields(self, client: AsyncClient, alice, api, make_note):
        note = await make_note("alice", title="Old", content="Keep me", course_tag="CS")

        response = await client.patch(f"{NOTES}/{note.id}", json={"title": "New"}, headers=alice)

        data = api.assert_success(response)["data"]
        assert data["title"] == "New"
        assert data["content"] == "Keep me"
        assert data["course_tag"] == "CS"

    @pytest.mark.asyncio
    async def test_flag_patch(self, client: AsyncClient, alice, api, make_note):
        note = await make_note("alice")

        response = await client.patch(
            f"{NOTES}/{note.id}",
            json={"is_pinned": True, "is_archived": True},
            headers=alice,
        )

        data = api.assert_success(response)["data"]
        assert data["is_pinned"] is True
        assert data["is_archived"] is True
        assert data["is_deleted"] is False

    @pytest.mark.asyncio
    async def test_explicit_null_rejected(self, client: AsyncClient, alice, api, make_note):
        note = await make_note("alice")

        response = await client.patch(f"{NOTES}/{note.id}", json={"title": None}, headers=alice)

        api.assert_validation_error(response)

    @pytest.mark.asyncio
    async def test_cannot_update_other_owners_note(self, client: AsyncClient, alice, bob, api, make_note):
        note = await make_note("alice", title="Mine")

        response = await client.patch(f"{NOTES}/{note.id}", json={"title": "Hijacked"}, headers=bob)
        api.assert_error(response, 404, "RES_NOT_FOUND")

        unchanged = await client.get(f"{NOTES}/{note.id}", headers=alice)
        assert api.assert_success(unchanged)["data"]["title"] == "Mine"


class TestLifecycle:
    """Tests for trash, restore, archive and pin routes."""

    @pytest.mark.asyncio
    async def test_soft_delete_then_restore(self, client: AsyncClient, alice, api, make_note):
        """Should move a note to the trash and back to the default view."""
        note = await make_note("alice", title="Round trip", is_archived=True)

        deleted = await client.delete(f"{NOTES}/{note.id}", headers=alice)
        assert deleted.status_code == 204

        trash = await client.get(NOTES, params={"view": "deleted"}, headers=alice)
        assert titles(api.assert_success(trash)) == ["Round trip"]

        restored = await client.post(f"{NOTES}/{note.id}/restore", headers=alice)
        data = api.assert_success(restored)["data"]
        assert data["is_deleted"] is False
        assert data["is_archived"] is False

        default = await client.get(NOTES, headers=alice)
        assert titles(api.assert_success(default)) == ["Round trip"]

    @pytest.mark.asyncio
    async def test_archive_and_unarchive(self, client: AsyncClient, alice, api, make_note):
        note = await make_note("alice", title="Semester 1")

        archived = await client.post(f"{NOTES}/{note.id}/archive", headers=alice)
        assert api.assert_success(archived)["data"]["is_archived"] is True

        archive = await client.get(NOTES, params={"view": "archive"}, headers=alice)
        assert titles(api.assert_success(archive)) == ["Semester 1"]

        unarchived = await client.post(f"{NOTES}/{note.id}/unarchive", headers=alice)
        assert api.assert_success(unarchived)["data"]["is_archived"] is False

    @pytest.mark.asyncio
    async def test_pin_and_unpin(self, client: AsyncClient, alice, api, make_note):
        note = await make_note("alice")

        pinned = await client.post(f"{NOTES}/{note.id}/pin", headers=alice)
        assert api.assert_success(pinned)["data"]["is_pinned"] is True

        unpinned = await client.post(f"{NOTES}/{note.id}/unpin", headers=alice)
        assert api.assert_success(unpinned)["data"]["is_pinned"] is False

    @pytest.mark.asyncio
    async def test_permanent_delete(self, client: AsyncClient, alice, api, make_note):
        """Should remove the note from every view."""
        note = await make_note("alice", is_deleted=True)

        response = await client.delete(f"{NOTES}/{note.id}/permanent", headers=alice)
        assert response.status_code == 204

        gone = await client.get(f"{NOTES}/{note.id}", headers=alice)
        api.assert_error(gone, 404, "RES_NOT_FOUND")

    @pytest.mark.asyncio
    async def test_cannot_delete_other_owners_note(self, client: AsyncClient, alice, bob, api, make_note):
        note = await make_note("alice")

        soft = await client.delete(f"{NOTES}/{note.id}", headers=bob)
        hard = await client.delete(f"{NOTES}/{note.id}/permanent", headers=bob)

        api.assert_error(soft, 404, "RES_NOT_FOUND")
        api.assert_error(hard, 404, "RES_NOT_FOUND")

        still_there = await client.get(f"{NOTES}/{note.id}", headers=alice)
        assert api.assert_success(still_there)["data"]["is_deleted"] is False
