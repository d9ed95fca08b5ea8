"""
Pydantic schemas for property responses.
"""

from pydantic import BaseModel, Field
from typing import Optional


class PropertyResponse(BaseModel):
    """Serialized property as returned by the API."""

    id: str = Field(..., description="Property ID")
    name: str = Field(..., description="Property name", examples=["Cabin"])
    street: str = Field(..., examples=["1 Pine Rd"])
    city: str = Field(..., examples=["Asheville"])
    state: str = Field(..., description="Two-letter state code", examples=["NC"])
    zipcode: int = Field(..., examples=[28801])
    type: str = Field(..., description="Property category", examples=["house"])
    owner: Optional[str] = Field(None, description="Free-form owner name")
    thumb_url: str = Field(..., alias="thumbUrl", description="Thumbnail image URL")

    model_config = {"populate_by_name": True}
