# Importing the models registers their tables on Base.metadata
from studyplanner.backend.models.base import Base
from studyplanner.backend.models.grade_record import GradeRecord
from studyplanner.backend.models.note import Note
from studyplanner.backend.models.sleep import SleepReminder, SleepSession
from studyplanner.backend.models.task import Task
from studyplanner.backend.models.user import User

__all__ = [
    "Base",
    "GradeRecord",
    "Note",
    "SleepReminder",
    "SleepSession",
    "Task",
    "User",
]
