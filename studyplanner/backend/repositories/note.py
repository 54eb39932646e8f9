"""
Note Repository.

The three views partition an owner's notes:

    default  not archived, not deleted (optionally one course tag)
    archive  archived, not deleted
    deleted  deleted, whatever the archive flag says

Every view lists pinned notes first, then newest first.
"""

from sqlalchemy import ColumnElement, false, true

from studyplanner.backend.models.note import Note
from studyplanner.backend.repositories.base import OwnedRepository
from studyplanner.backend.schemas.note import NoteView

_ACTIVE = (Note.is_archived == false(), Note.is_deleted == false())

_VIEW_FILTERS: dict[NoteView, tuple[ColumnElement[bool], ...]] = {
    NoteView.DEFAULT: _ACTIVE,
    NoteView.ARCHIVE: (Note.is_archived == true(), Note.is_deleted == false()),
    NoteView.DELETED: (Note.is_deleted == true(),),
}


class NoteRepository(OwnedRepository[Note]):
    model = Note

    async def find_by_view(self, view: NoteView, course_tag: str | None = None) -> list[Note]:
        """
        Notes in one view.

        Args:
            view: which partition to list; a plain string must name a NoteView
            course_tag: exact match, applied to the default view only

        Raises:
            ValueError: If ``view`` is not a NoteView value
        """
        view = NoteView(view)
        criteria = list(_VIEW_FILTERS[view])
        if course_tag and view is NoteView.DEFAULT:
            criteria.append(Note.course_tag == course_tag)

        stmt = self._select(*criteria).order_by(Note.is_pinned.desc(), Note.created_at.desc())
        return await self._all(stmt)

    async def distinct_active_tags(self) -> list[str]:
        """Sorted, non-empty course tags of notes in the default view."""
        stmt = (
            self._select(*_ACTIVE, columns=(Note.course_tag,))
            .distinct()
            .order_by(Note.course_tag)
        )
        return [tag for tag in await self._all(stmt) if tag]
