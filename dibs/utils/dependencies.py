"""
FastAPI dependency injection utilities for authentication and repositories.
Provides reusable dependencies for route protection and data access.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from dibs.database import get_db
from dibs.repositories.user import UserRepository
from dibs.repositories.property import PropertyRepository
from dibs.repositories.reservation import ReservationRepository
from dibs.services.auth import AuthenticatedUser, get_strategy


def authenticate(strategy_name: str):
    """
    Create a dependency that authenticates the request with a named strategy.

    Args:
        strategy_name: "local" or "jwt"

    Returns:
        Dependency function yielding the AuthenticatedUser
    """
    strategy = get_strategy(strategy_name)

    async def strategy_dependency(
        request: Request,
        db: AsyncSession = Depends(get_db)
    ) -> AuthenticatedUser:
        return await strategy.authenticate(request, db)

    return strategy_dependency


# Shared instances so routes that use the same strategy share one dependency
jwt_auth = authenticate("jwt")
local_auth = authenticate("local")


async def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


async def get_property_repository(db: AsyncSession = Depends(get_db)) -> PropertyRepository:
    return PropertyRepository(db)


async def get_reservation_repository(db: AsyncSession = Depends(get_db)) -> ReservationRepository:
    return ReservationRepository(db)
