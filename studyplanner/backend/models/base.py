"""
Declarative Base and Column Mixins.

Timestamps are naive UTC (see core.utils.utc_now). Primary keys are
uuid4 strings so they are portable between PostgreSQL and SQLite.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from studyplanner.backend.core.utils import utc_now


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False
    )


class OwnedMixin:
    """Rows that belong to exactly one identity-provider user."""

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
