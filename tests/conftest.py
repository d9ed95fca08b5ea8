"""
Test configuration and fixtures for the Dibs API.
Provides database fixtures, test data factories, and common test utilities.
"""

import pytest
from typing import AsyncGenerator, Dict, Any
from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from dibs.config import settings
from dibs.database import Database
from dibs.main import create_app
from dibs.models.user import User
from dibs.repositories.user import UserRepository
from dibs.repositories.property import PropertyRepository
from dibs.repositories.reservation import ReservationRepository
from dibs.utils.auth import create_auth_token


TEST_USERNAME = "exampleUser"
TEST_PASSWORD = "examplePassword"
TEST_FIRST_NAME = "Example"
TEST_LAST_NAME = "User"


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh database with an empty schema for each test."""
    db = Database(settings.test_database_url)
    await db.connect()
    yield db
    await db.drop_tables()
    await db.disconnect()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def test_app(database: Database) -> FastAPI:
    """Application bound to the test database."""
    return create_app(database)


@pytest.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client talking to the app in-process."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    return ReservationRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        username: str = TEST_USERNAME,
        password: str = TEST_PASSWORD,
        first_name: str = TEST_FIRST_NAME,
        last_name: str = TEST_LAST_NAME
    ) -> dict:
        return {
            "username": username,
            "password": password,
            "first_name": first_name,
            "last_name": last_name
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for property request bodies."""

    @staticmethod
    def create_property_data(
        name: str = "Cabin",
        street: str = "1 Pine Rd",
        city: str = "Asheville",
        state: str = "NC",
        zipcode: Any = 28801,
        type: str = "house",
        thumb_url: str = "http://x/y.png",
        **extra
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "street": street,
            "city": city,
            "state": state,
            "zipcode": zipcode,
            "type": type,
            "thumbUrl": thumb_url,
            **extra
        }


class ReservationFactory:
    """Factory for reservation request bodies."""

    @staticmethod
    def create_reservation_data(
        username: str = TEST_USERNAME,
        property_name: str = "Cabin",
        start: str = "2026-11-01T15:00:00.000Z",
        end: str = "2026-11-03T11:00:00.000Z"
    ) -> Dict[str, Any]:
        return {
            "username": username,
            "propertyName": property_name,
            "start": start,
            "end": end
        }


# Common test fixtures
@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    """Create a registered test user."""
    return await UserFactory.create_user(user_repository)


@pytest.fixture
def auth_token() -> str:
    """Valid bearer token for the test user."""
    return create_auth_token({
        "username": TEST_USERNAME,
        "firstName": TEST_FIRST_NAME,
        "lastName": TEST_LAST_NAME
    })


@pytest.fixture
def expired_token() -> str:
    return create_auth_token(
        {"username": TEST_USERNAME, "firstName": TEST_FIRST_NAME, "lastName": TEST_LAST_NAME},
        expires_delta=timedelta(seconds=-30)
    )


@pytest.fixture
def auth_headers(auth_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {auth_token}"}
