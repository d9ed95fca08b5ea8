"""
Database models for the Dibs API.
Includes User, Property and Reservation models.
"""

from dibs.models.user import User
from dibs.models.property import Property, STATE_CODES
from dibs.models.reservation import Reservation

__all__ = [
    "User",
    "Property",
    "STATE_CODES",
    "Reservation",
]
