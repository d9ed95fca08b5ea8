"""
Property repository for property CRUD operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from dibs.repositories.base import BaseRepository
from dibs.models.property import Property


class PropertyRepository(BaseRepository[Property]):
    """Repository for properties. Adds nothing beyond the generic CRUD calls."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
