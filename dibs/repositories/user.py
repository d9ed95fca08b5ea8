"""
User repository for registration and login.
Hashes passwords on create and verifies them on authenticate.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from dibs.repositories.base import BaseRepository
from dibs.models.user import User
from dibs.utils.exceptions import ValidationError
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with password hashing.

        Args:
            user_data: Dictionary containing user information
                      Must include: username, password
                      Optional: first_name, last_name

        Returns:
            Created user instance

        Raises:
            ValidationError: If the username is already taken
            Exception: If database operation fails
        """
        username = user_data["username"]

        existing_user = await self.get_by_username(username)
        if existing_user:
            logger.info(f"Registration rejected, username taken: {username}")
            raise ValidationError("Username already taken", location="username")

        create_data = {
            **user_data,
            "password": User.hash_password(user_data["password"]),
        }

        try:
            created_user = await self.create(create_data)
        except IntegrityError:
            # Another registration took the name between the check and the insert
            if await self.get_by_username(username) is not None:
                logger.info(f"Registration rejected, username taken: {username}")
                raise ValidationError("Username already taken", location="username")
            raise

        logger.info(f"Created user: {created_user.username} (ID: {created_user.id})")
        return created_user

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Returns:
            User instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()

            if not user:
                logger.debug(f"User {username} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by username {username}: {e}")
            raise

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate user with username and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_username(username)

        if not user:
            logger.debug(f"Authentication failed: user {username} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {username}")
            return None

        logger.info(f"User authenticated successfully: {username}")
        return user
