"""
Sleep Models.

Bedtime reminders and logged nights. Neither is edited after creation;
both are only listed and deleted.
"""

from datetime import date, time

from sqlalchemy import Date, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from studyplanner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class SleepReminder(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Named reminder at a wall-clock time."""

    __tablename__ = "sleep_reminders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    reminder_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SleepReminder(id={self.id}, name={self.name!r}, at={self.reminder_time})>"


class SleepSession(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    One night of sleep.

    ``duration_str`` is the client's own rendering ("7h 30m") and is
    stored verbatim, not computed from the two times.
    """

    __tablename__ = "sleep_sessions"

    sleep_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    bed_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )
    wakeup_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )
    duration_str: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    interruption_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    dreams_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    sleep_quality: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<SleepSession(id={self.id}, date={self.sleep_date}, duration={self.duration_str!r})>"
