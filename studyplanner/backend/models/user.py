"""
User Model.

Registration record linking an identity-provider user id to an email.
Notes and grade records reference ``user_id`` through their ``owner_id``.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from studyplanner.backend.models.base import Base, TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    """User registration model."""

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id!r})>"
