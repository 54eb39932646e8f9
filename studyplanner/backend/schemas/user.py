"""
User Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """Registration request from the frontend after sign-up."""

    user_id: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")


class UserResponse(BaseModel):
    """Stored registration record."""

    user_id: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CurrentUserResponse(BaseModel):
    """Identity resolved from the bearer token."""

    id: str
    email: str | None = None
    name: str = ""
