"""
Task Schemas.

Pydantic schemas for task API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Task title",
        examples=["Finish lab report"],
    )
    description: str | None = Field(
        default=None,
        max_length=10000,
        description="Optional details",
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Client-defined grouping",
        examples=["Homework"],
    )
    priority_level: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Client-defined priority",
        examples=["high"],
    )


class TaskUpdate(TaskCreate):
    """
    Replacement for a task.

    Title, category and priority are required as on create. An omitted
    description keeps its stored value; an explicit null clears it.
    """

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    """Schema for task in API responses."""

    id: str
    owner_id: str
    title: str
    description: str | None
    category: str
    priority_level: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
