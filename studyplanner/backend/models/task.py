"""
Task Model.

A to-do item on the student's planner. Category and priority are free
text chosen by the client.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studyplanner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Task(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Task database model."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    priority_level: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title!r}, priority={self.priority_level})>"
