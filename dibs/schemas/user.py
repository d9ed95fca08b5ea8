"""
Pydantic schemas for user responses.
"""

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Public user shape; never carries the password hash."""

    username: str = Field(..., examples=["jdoe"])
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")

    model_config = {"populate_by_name": True}
