"""
Note Model.

Free-form study note with independent pin/archive/delete flags.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studyplanner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin

DEFAULT_COURSE_TAG = "General"


class Note(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Note database model.

    A note is visible in exactly one view, derived from its flags:
    active (not archived, not deleted), archived (archived, not deleted)
    or trashed (deleted, archive flag ignored). ``is_pinned`` only
    affects ordering.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    course_tag: Mapped[str] = mapped_column(
        String(100),
        default=DEFAULT_COURSE_TAG,
        nullable=False,
        index=True,
    )
    is_pinned: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    is_archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    is_deleted: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    @property
    def view(self) -> str:
        """Name of the view this note currently appears in."""
        if self.is_deleted:
            return "deleted"
        if self.is_archived:
            return "archive"
        return "default"

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, view={self.view})>"
