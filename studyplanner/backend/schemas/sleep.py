"""
Sleep Schemas.

Times are wall-clock times such as "22:30"; dates are ISO dates.
"""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field


class SleepReminderCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Lights out"])
    reminder_time: time = Field(..., examples=["22:30"])


class SleepReminderResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    reminder_time: time
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SleepSessionCreate(BaseModel):
    """Schema for logging a night of sleep."""

    sleep_date: date = Field(..., description="Night the session started", examples=["2024-09-01"])
    bed_time: time = Field(..., examples=["23:15"])
    wakeup_time: time = Field(..., examples=["07:00"])
    duration_str: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Duration as the client displays it",
        examples=["7h 45m"],
    )
    interruption_note: str | None = Field(default=None, max_length=10000)
    dreams_note: str | None = Field(default=None, max_length=10000)
    sleep_quality: str | None = Field(default=None, max_length=50, examples=["rested"])


class SleepSessionResponse(BaseModel):
    id: str
    owner_id: str
    sleep_date: date
    bed_time: time
    wakeup_time: time
    duration_str: str
    interruption_note: str | None
    dreams_note: str | None
    sleep_quality: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
