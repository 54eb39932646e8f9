"""
Note Service.

Business logic layer for notes: creation defaults, merge-patch updates,
the archive/trash lifecycle and filtered listings. All operations are
scoped to the owner the service was built for.

Lifecycle over (is_archived, is_deleted):

    active (F,F)  --archive-->       archived (T,F)
    archived      --unarchive-->     active
    any           --soft_delete-->   trashed (*,T)
    trashed       --restore-->       active
    any           --permanently_delete--> removed
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.models.note import DEFAULT_COURSE_TAG, Note
from studyplanner.backend.repositories.note import NoteRepository
from studyplanner.backend.schemas.note import NoteCreate, NoteUpdate, NoteView
from studyplanner.backend.services.base import OwnedService


def normalize_course_tag(course_tag: str | None) -> str:
    """Trimmed tag, or the default tag when absent or blank."""
    if course_tag is None or not course_tag.strip():
        return DEFAULT_COURSE_TAG
    return course_tag.strip()


class NoteService(OwnedService):
    """
    Service for note business logic.

    Handles note creation, updates, state transitions and retrieval
    for a single owner.
    """

    def __init__(self, session: AsyncSession, owner_id: str | None) -> None:
        super().__init__(session, owner_id)
        self.repo = NoteRepository(session, self.owner_id)

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note in the active view.

        Raises:
            ValidationError: If title or content is blank
        """
        self._validate_required(data.model_dump(), ["title", "content"])
        self._log_operation("Creating note", title=data.title)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                title=data.title,
                content=data.content,
                course_tag=normalize_course_tag(data.course_tag),
                is_pinned=False,
                is_archived=False,
                is_deleted=False,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: str) -> Note:
        """
        Get one of the owner's notes.

        Raises:
            NotFoundError: If note not found or owned by someone else
        """
        return await self.repo.get_by_id(note_id)

    async def list_notes(
        self,
        view: NoteView = NoteView.DEFAULT,
        course_tag: str | None = None,
    ) -> list[Note]:
        """
        List the notes of one view, pinned first, then newest first.

        ``course_tag`` narrows the default view only; the archive and
        deleted views ignore it.
        """
        self._log_debug("Listing notes", view=view.value, course_tag=course_tag)
        return await self.repo.find_by_view(view, course_tag=course_tag)

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Apply a merge-patch to a note.

        Only fields present in ``data`` change. Setting ``is_deleted``
        here is the soft-delete and restore path.

        Raises:
            NotFoundError: If note not found or owned by someone else
            ValidationError: If title or content is set to blank
        """
        return await self._apply_changes(note_id, data.changes())

    async def soft_delete_note(self, note_id: str) -> Note:
        """Move a note to the trash. Reversible with ``restore_note``."""
        return await self._apply_changes(note_id, {"is_deleted": True})

    async def restore_note(self, note_id: str) -> Note:
        """Bring a trashed or archived note back to the active view."""
        return await self._apply_changes(
            note_id, {"is_deleted": False, "is_archived": False}
        )

    async def archive_note(self, note_id: str) -> Note:
        return await self._apply_changes(note_id, {"is_archived": True})

    async def unarchive_note(self, note_id: str) -> Note:
        return await self._apply_changes(note_id, {"is_archived": False})

    async def pin_note(self, note_id: str) -> Note:
        return await self._apply_changes(note_id, {"is_pinned": True})

    async def unpin_note(self, note_id: str) -> Note:
        return await self._apply_changes(note_id, {"is_pinned": False})

    async def permanently_delete_note(self, note_id: str) -> None:
        """
        Remove a note for good, whatever its flags.

        Raises:
            NotFoundError: If note not found or owned by someone else
        """
        self._log_operation("Permanently deleting note", note_id=note_id)

        await self._execute_db_operation(
            "permanently_delete_note",
            self.repo.delete(note_id),
        )

    async def list_tags(self) -> list[str]:
        """Distinct non-empty course tags of the owner's active notes."""
        return await self.repo.distinct_active_tags()

    async def _apply_changes(self, note_id: str, changes: dict[str, Any]) -> Note:
        if not changes:
            return await self.repo.get_by_id(note_id)

        for name in ("title", "content"):
            if name in changes:
                self._validate_required(changes, [name])
        if "course_tag" in changes:
            changes["course_tag"] = normalize_course_tag(changes["course_tag"])

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=sorted(changes),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note_id, **changes),
        )
