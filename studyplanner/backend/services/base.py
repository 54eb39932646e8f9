"""
Service Base Classes.

Services hold the business rules and own the transaction boundary. Routes
call services; services call repositories. Database failures leave a
service only as application exceptions from core.exceptions.

Usage:
    class NoteService(OwnedService):
        def __init__(self, session: AsyncSession, owner_id: str) -> None:
            super().__init__(session, owner_id)
            self.repo = NoteRepository(session, self.owner_id)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from studyplanner.backend.core.logging import get_logger

T = TypeVar("T")

# Substrings PostgreSQL and SQLite use when a unique index rejects a row.
_UNIQUE_MARKERS = ("unique", "duplicate")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error).lower()
    return any(marker in text for marker in _UNIQUE_MARKERS)


class BaseService:
    """Session holder with database error translation and logging helpers."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(type(self).__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    def _log_context(self, **context: Any) -> dict[str, Any]:
        return {"service": type(self).__name__, **context}

    async def _execute_db_operation(self, operation: str, coro: Awaitable[T]) -> T:
        """
        Await a repository call, translating SQLAlchemy failures.

        Unique violations become ConflictError, anything else raised by
        SQLAlchemy becomes DatabaseError. Application exceptions pass
        through untouched. Nothing is retried.
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra=self._log_context(operation=operation, error=str(e)),
            )
            if _is_unique_violation(e):
                raise ConflictError("Resource already exists") from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra=self._log_context(operation=operation, error=str(e)),
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _validate_required(self, fields: dict[str, Any], field_names: list[str]) -> None:
        """Raise ValidationError naming every field that is None or blank."""
        missing = [name for name in field_names if _is_blank(fields.get(name))]
        if missing:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": missing},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, extra=self._log_context(**context))

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, extra=self._log_context(**context))


class OwnedService(BaseService):
    """
    Service bound to one resolved identity.

    Construction fails with AuthenticationError when the owner id is
    missing or blank, so every operation on a subclass runs for exactly
    one owner.
    """

    def __init__(self, session: AsyncSession, owner_id: str | None) -> None:
        super().__init__(session)
        if _is_blank(owner_id):
            raise AuthenticationError("No resolved identity for this operation")
        self._owner_id = owner_id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    def _log_context(self, **context: Any) -> dict[str, Any]:
        return super()._log_context(owner_id=self._owner_id, **context)
