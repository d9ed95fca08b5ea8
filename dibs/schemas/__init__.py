"""
Pydantic schemas for API responses.
"""

from dibs.schemas.auth import AuthTokenResponse, ProtectedResponse
from dibs.schemas.property import PropertyResponse
from dibs.schemas.reservation import ReservationResponse
from dibs.schemas.user import UserResponse

__all__ = [
    "AuthTokenResponse",
    "ProtectedResponse",
    "PropertyResponse",
    "ReservationResponse",
    "UserResponse",
]
