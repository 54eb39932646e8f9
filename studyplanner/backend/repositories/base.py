"""
Repository Base Classes.

Repositories are the only code that builds SQL. They flush but never
commit; the session dependency owns the transaction.

Row visibility is decided in one place, ``_visible``. OwnedRepository
narrows it to a single owner, and every read, update and delete below
is built on top of it.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.exceptions import NotFoundError
from studyplanner.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one model.

        class UserRepository(BaseRepository[User]):
            model = User
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _visible(self, stmt: Select) -> Select:
        """Hook for subclasses that may only see some rows."""
        return stmt

    def _select(self, *criteria: Any, columns: tuple = ()) -> Select:
        stmt = select(*columns) if columns else select(self.model)
        return self._visible(stmt.where(*criteria))

    async def _all(self, stmt: Select) -> list[Any]:
        return list((await self.session.execute(stmt)).scalars().all())

    async def _first(self, stmt: Select) -> Any:
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def get_by_id_or_none(self, id: str | UUID) -> ModelType | None:
        return await self._first(self._select(self.model.id == str(id)))

    async def get_by_id(self, id: str | UUID) -> ModelType:
        """Raises NotFoundError("<Model> not found") for missing or invisible rows."""
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def get_all(self) -> list[ModelType]:
        return await self._all(self._select())

    async def exists(self, id: str | UUID) -> bool:
        stmt = self._select(self.model.id == str(id), columns=(self.model.id,))
        return await self._first(stmt) is not None

    async def create(self, **values: Any) -> ModelType:
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str | UUID, **changes: Any) -> ModelType:
        """Apply only the given columns; unknown names are ignored."""
        instance = await self.get_by_id(id)
        for column, value in changes.items():
            if hasattr(instance, column):
                setattr(instance, column, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str | UUID) -> None:
        await self.session.delete(await self.get_by_id(id))
        await self.session.flush()


class OwnedRepository(BaseRepository[ModelType]):
    """
    CRUD restricted to the rows of one owner.

    Another owner's row behaves exactly like a missing one, and
    ``create`` always stamps this repository's owner, whatever the
    caller passed.
    """

    def __init__(self, session: AsyncSession, owner_id: str) -> None:
        super().__init__(session)
        self.owner_id = owner_id

    def _visible(self, stmt: Select) -> Select:
        return stmt.where(self.model.owner_id == self.owner_id)

    async def create(self, **values: Any) -> ModelType:
        return await super().create(**{**values, "owner_id": self.owner_id})
