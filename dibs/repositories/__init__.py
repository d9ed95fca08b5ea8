"""
Repository layer for data access operations.
Provides abstraction over database operations with async SQLAlchemy.
"""

from dibs.repositories.base import BaseRepository
from dibs.repositories.user import UserRepository
from dibs.repositories.property import PropertyRepository
from dibs.repositories.reservation import ReservationRepository

__all__ = ["BaseRepository", "UserRepository", "PropertyRepository", "ReservationRepository"]
