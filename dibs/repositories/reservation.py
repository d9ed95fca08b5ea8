"""
Reservation repository for reservation CRUD operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from dibs.repositories.base import BaseRepository
from dibs.models.reservation import Reservation


class ReservationRepository(BaseRepository[Reservation]):
    """
    Repository for reservations.
    No conflict detection: overlapping reservations for one property are stored as-is.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)
