"""
Pydantic schemas for reservation responses.
"""

from pydantic import BaseModel, Field


class ReservationResponse(BaseModel):
    """Serialized reservation as returned by the API."""

    id: str = Field(..., description="Reservation ID")
    username: str = Field(..., description="User holding the reservation")
    property_name: str = Field(..., alias="propertyName", description="Reserved property, by name")
    start: str = Field(..., description="ISO-8601 start instant", examples=["2026-11-01T15:00:00Z"])
    end: str = Field(..., description="ISO-8601 end instant", examples=["2026-11-03T11:00:00Z"])

    model_config = {"populate_by_name": True}
