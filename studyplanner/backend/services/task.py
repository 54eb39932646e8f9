"""
Task Service.

Create, list, replace and delete the owner's tasks.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.models.task import Task
from studyplanner.backend.repositories.task import TaskRepository
from studyplanner.backend.schemas.task import TaskCreate, TaskUpdate
from studyplanner.backend.services.base import OwnedService

REQUIRED_FIELDS = ["title", "category", "priority_level"]


class TaskService(OwnedService):
    """Service for task business logic."""

    def __init__(self, session: AsyncSession, owner_id: str | None) -> None:
        super().__init__(session, owner_id)
        self.repo = TaskRepository(session, self.owner_id)

    async def create_task(self, data: TaskCreate) -> Task:
        """
        Create a task.

        Raises:
            ValidationError: If title, category or priority is blank
        """
        self._validate_required(data.model_dump(), REQUIRED_FIELDS)
        self._log_operation("Creating task", category=data.category)

        return await self._execute_db_operation(
            "create_task",
            self.repo.create(**data.model_dump()),
        )

    async def list_tasks(self) -> list[Task]:
        return await self.repo.get_all_newest_first()

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        """
        Replace a task's fields.

        Raises:
            NotFoundError: If task not found or owned by someone else
            ValidationError: If title, category or priority is blank
        """
        changes = data.changes()
        self._validate_required(changes, REQUIRED_FIELDS)
        self._log_operation("Updating task", task_id=task_id, fields=sorted(changes))

        return await self._execute_db_operation(
            "update_task",
            self.repo.update(task_id, **changes),
        )

    async def delete_task(self, task_id: str) -> None:
        """
        Hard delete a task.

        Raises:
            NotFoundError: If task not found or owned by someone else
        """
        self._log_operation("Deleting task", task_id=task_id)

        await self._execute_db_operation(
            "delete_task",
            self.repo.delete(task_id),
        )
