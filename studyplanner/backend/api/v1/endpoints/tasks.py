"""
Tasks API Endpoints.

    GET    /tasks          newest first
    POST   /tasks          create (201)
    PUT    /tasks/{id}     replace title, category, priority and description
    DELETE /tasks/{id}     remove (204)
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from studyplanner.backend.core.dependencies import DbSession, OwnerId
from studyplanner.backend.schemas.base import ApiResponse
from studyplanner.backend.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from studyplanner.backend.services.task import TaskService

router = APIRouter()


def get_task_service(db: DbSession, owner_id: OwnerId) -> TaskService:
    return TaskService(db, owner_id)


Tasks = Annotated[TaskService, Depends(get_task_service)]


@router.get("", response_model=ApiResponse[list[TaskResponse]], summary="List tasks")
async def list_tasks(tasks: Tasks) -> ApiResponse[list[TaskResponse]]:
    return ApiResponse(data=[TaskResponse.model_validate(task) for task in await tasks.list_tasks()])


@router.post("", response_model=ApiResponse[TaskResponse], status_code=201, summary="Create a task")
async def create_task(data: TaskCreate, tasks: Tasks) -> ApiResponse[TaskResponse]:
    return ApiResponse(data=TaskResponse.model_validate(await tasks.create_task(data)))


@router.put(
    "/{task_id}",
    response_model=ApiResponse[TaskResponse],
    summary="Replace a task",
    description="An omitted description keeps its stored value.",
)
async def update_task(task_id: str, data: TaskUpdate, tasks: Tasks) -> ApiResponse[TaskResponse]:
    return ApiResponse(data=TaskResponse.model_validate(await tasks.update_task(task_id, data)))


@router.delete("/{task_id}", status_code=204, summary="Delete a task")
async def delete_task(task_id: str, tasks: Tasks) -> None:
    await tasks.delete_task(task_id)
