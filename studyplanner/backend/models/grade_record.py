"""
Grade Record Model.

One course result. ``grade`` and ``gpa`` are derived from ``score`` when the
record is created and stored as-is afterwards.
"""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from studyplanner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class GradeRecord(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Grade record database model."""

    __tablename__ = "grade_records"

    course: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    credit_hours: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    grade: Mapped[str] = mapped_column(
        String(2),
        nullable=False,
    )
    gpa: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<GradeRecord(id={self.id}, course={self.course!r}, grade={self.grade})>"
