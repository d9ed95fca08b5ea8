"""
Pydantic schemas for authentication responses.
"""

from pydantic import BaseModel, Field


class AuthTokenResponse(BaseModel):
    """Signed JWT issued by login and refresh."""

    auth_token: str = Field(
        ...,
        alias="authToken",
        description="JWT to send as `Authorization: Bearer <token>`",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )

    model_config = {"populate_by_name": True}


class ProtectedResponse(BaseModel):
    data: str
