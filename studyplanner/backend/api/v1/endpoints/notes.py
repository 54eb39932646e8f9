"""
Notes API Endpoints.

    GET    /notes                     one view, pinned first then newest
    POST   /notes                     create
    GET    /notes/tags                distinct tags of active notes
    GET    /notes/{id}                read
    PATCH  /notes/{id}                merge-patch
    DELETE /notes/{id}                move to trash (204)
    DELETE /notes/{id}/permanent      remove for good (204)
    POST   /notes/{id}/{action}       archive, unarchive, restore, pin, unpin

The caller's notes only: another owner's note answers 404 exactly like
a missing one.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from studyplanner.backend.core.dependencies import DbSession, OwnerId
from studyplanner.backend.models.note import Note
from studyplanner.backend.schemas.base import ApiResponse
from studyplanner.backend.schemas.note import (
    NoteAction,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    NoteView,
)
from studyplanner.backend.services.note import NoteService

router = APIRouter()


def get_note_service(db: DbSession, owner_id: OwnerId) -> NoteService:
    return NoteService(db, owner_id)


Notes = Annotated[NoteService, Depends(get_note_service)]

_TRANSITIONS: dict[NoteAction, Callable[[NoteService, str], Awaitable[Note]]] = {
    NoteAction.ARCHIVE: NoteService.archive_note,
    NoteAction.UNARCHIVE: NoteService.unarchive_note,
    NoteAction.RESTORE: NoteService.restore_note,
    NoteAction.PIN: NoteService.pin_note,
    NoteAction.UNPIN: NoteService.unpin_note,
}


def _single(note: Note) -> ApiResponse[NoteResponse]:
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.get("", response_model=ApiResponse[list[NoteResponse]], summary="List notes")
async def list_notes(
    notes: Notes,
    view: NoteView = Query(default=NoteView.DEFAULT, description="default, archive or deleted"),
    course_tag: str | None = Query(
        default=None,
        max_length=100,
        description="Exact tag; narrows the default view only",
    ),
) -> ApiResponse[list[NoteResponse]]:
    found = await notes.list_notes(view=view, course_tag=course_tag)
    return ApiResponse(data=[NoteResponse.model_validate(note) for note in found])


@router.post("", response_model=ApiResponse[NoteResponse], status_code=201, summary="Create a note")
async def create_note(data: NoteCreate, notes: Notes) -> ApiResponse[NoteResponse]:
    return _single(await notes.create_note(data))


@router.get("/tags", response_model=ApiResponse[list[str]], summary="List course tags")
async def list_tags(notes: Notes) -> ApiResponse[list[str]]:
    return ApiResponse(data=await notes.list_tags())


@router.get("/{note_id}", response_model=ApiResponse[NoteResponse], summary="Get a note")
async def get_note(note_id: str, notes: Notes) -> ApiResponse[NoteResponse]:
    return _single(await notes.get_note(note_id))


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Merge-patch: omitted fields keep their value, null is rejected.",
)
async def update_note(note_id: str, data: NoteUpdate, notes: Notes) -> ApiResponse[NoteResponse]:
    return _single(await notes.update_note(note_id, data))


@router.delete("/{note_id}", status_code=204, summary="Move a note to the trash")
async def soft_delete_note(note_id: str, notes: Notes) -> None:
    await notes.soft_delete_note(note_id)


@router.delete("/{note_id}/permanent", status_code=204, summary="Permanently delete a note")
async def permanently_delete_note(note_id: str, notes: Notes) -> None:
    await notes.permanently_delete_note(note_id)


@router.post(
    "/{note_id}/{action}",
    response_model=ApiResponse[NoteResponse],
    summary="Change a note's state",
    description="restore clears both the trash and archive flags.",
)
async def transition_note(note_id: str, action: NoteAction, notes: Notes) -> ApiResponse[NoteResponse]:
    return _single(await _TRANSITIONS[action](notes, note_id))
