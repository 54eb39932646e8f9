"""
Sleep API Endpoints.

    GET    /reminders             earliest time of day first
    POST   /reminders             create (201)
    DELETE /reminders/{id}        remove (204)
    GET    /sleep-sessions        most recent night first
    POST   /sleep-sessions        log a night (201)
    DELETE /sleep-sessions/{id}   remove (204)
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from studyplanner.backend.core.dependencies import DbSession, OwnerId
from studyplanner.backend.schemas.base import ApiResponse
from studyplanner.backend.schemas.sleep import (
    SleepReminderCreate,
    SleepReminderResponse,
    SleepSessionCreate,
    SleepSessionResponse,
)
from studyplanner.backend.services.sleep import SleepService

router = APIRouter()


def get_sleep_service(db: DbSession, owner_id: OwnerId) -> SleepService:
    return SleepService(db, owner_id)


Sleep = Annotated[SleepService, Depends(get_sleep_service)]


@router.get("/reminders", response_model=ApiResponse[list[SleepReminderResponse]], summary="List sleep reminders")
async def list_reminders(sleep: Sleep) -> ApiResponse[list[SleepReminderResponse]]:
    found = await sleep.list_reminders()
    return ApiResponse(data=[SleepReminderResponse.model_validate(reminder) for reminder in found])


@router.post(
    "/reminders",
    response_model=ApiResponse[SleepReminderResponse],
    status_code=201,
    summary="Create a sleep reminder",
)
async def create_reminder(data: SleepReminderCreate, sleep: Sleep) -> ApiResponse[SleepReminderResponse]:
    return ApiResponse(data=SleepReminderResponse.model_validate(await sleep.create_reminder(data)))


@router.delete("/reminders/{reminder_id}", status_code=204, summary="Delete a sleep reminder")
async def delete_reminder(reminder_id: str, sleep: Sleep) -> None:
    await sleep.delete_reminder(reminder_id)


@router.get("/sleep-sessions", response_model=ApiResponse[list[SleepSessionResponse]], summary="List sleep sessions")
async def list_sessions(sleep: Sleep) -> ApiResponse[list[SleepSessionResponse]]:
    found = await sleep.list_sessions()
    return ApiResponse(data=[SleepSessionResponse.model_validate(night) for night in found])


@router.post(
    "/sleep-sessions",
    response_model=ApiResponse[SleepSessionResponse],
    status_code=201,
    summary="Log a sleep session",
)
async def log_session(data: SleepSessionCreate, sleep: Sleep) -> ApiResponse[SleepSessionResponse]:
    return ApiResponse(data=SleepSessionResponse.model_validate(await sleep.log_session(data)))


@router.delete("/sleep-sessions/{session_id}", status_code=204, summary="Delete a sleep session")
async def delete_session(session_id: str, sleep: Sleep) -> None:
    await sleep.delete_session(session_id)
