"""
Grade Record Schemas.

Pydantic schemas for grade record and GPA API validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GradeRecordCreate(BaseModel):
    """Schema for creating a grade record. Grade and GPA are derived."""

    course: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Course name",
        examples=["Linear Algebra"],
    )
    score: float = Field(
        ...,
        allow_inf_nan=False,
        description="Percentage score; any finite number",
        examples=[78.5],
    )
    credit_hours: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Credit weight of the course",
        examples=[3],
    )


class GradeRecordResponse(BaseModel):
    """Schema for grade record in API responses."""

    id: str
    owner_id: str
    course: str
    score: float
    credit_hours: float
    grade: str = Field(description="Letter grade at creation time")
    gpa: float = Field(description="Grade points at creation time")
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GpaResponse(BaseModel):
    """Cumulative GPA over all of a user's records."""

    gpa: float = Field(description="Credit-weighted GPA, 2 decimals, half-up")
    credit_total: float = Field(description="Sum of credit hours")

    model_config = ConfigDict(from_attributes=True)
