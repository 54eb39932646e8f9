"""
Task Repository.

Owner-scoped; listed newest first.
"""

from studyplanner.backend.models.task import Task
from studyplanner.backend.repositories.base import OwnedRepository


class TaskRepository(OwnedRepository[Task]):
    model = Task

    async def get_all_newest_first(self) -> list[Task]:
        return await self._all(self._select().order_by(Task.created_at.desc()))
