"""
User model for account registration and login.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from dibs.database import Base
from passlib.context import CryptContext
from typing import Dict, Any

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class User(Base):
    """
    User account. Usernames are unique; the password is stored as a bcrypt hash.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        Text,
        unique=True,
        nullable=False,
        index=True,
        comment="Unique login name"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    first_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    last_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify a password against the stored hash.

        Args:
            password: Plain text password to verify

        Returns:
            True if password matches, False otherwise
        """
        return pwd_context.verify(password, self.password)

    def serialize(self) -> Dict[str, Any]:
        """Public representation; never includes the password hash."""
        return {
            "username": self.username,
            "firstName": self.first_name or "",
            "lastName": self.last_name or "",
        }
