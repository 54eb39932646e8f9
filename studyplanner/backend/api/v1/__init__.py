"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from studyplanner.backend.api.v1.endpoints import grades, notes, sleep, tasks, users

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(grades.router, prefix="/grades", tags=["grades"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(sleep.router, tags=["sleep"])
router.include_router(users.router, prefix="/users", tags=["users"])
