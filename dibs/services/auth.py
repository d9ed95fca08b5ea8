"""
Authentication strategies.

Two interchangeable ways of establishing who is making a request:

* ``local``: username and password in the JSON body, checked against the
  stored bcrypt hash. Used by the login route.
* ``jwt``: a signed bearer token in the ``Authorization`` header. Used by
  every protected route.

Both return an ``AuthenticatedUser`` or raise ``UnauthorizedError``; routes
pick one by name through ``dibs.utils.dependencies.authenticate``.
"""

from abc import ABC, abstractmethod
from json import JSONDecodeError
from typing import Any, Dict
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from dibs.repositories.user import UserRepository
from dibs.utils.auth import extract_token_from_header, verify_token
from dibs.utils.exceptions import InvalidCredentialsError, UnauthorizedError
import logging

logger = logging.getLogger(__name__)


class AuthenticatedUser:
    """Identity established by a strategy for the current request."""

    def __init__(self, username: str, first_name: str = "", last_name: str = ""):
        self.username = username
        self.first_name = first_name
        self.last_name = last_name

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AuthenticatedUser":
        return cls(
            username=claims["username"],
            first_name=claims.get("firstName", ""),
            last_name=claims.get("lastName", "")
        )

    def serialize(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }


class AuthStrategy(ABC):
    """Base class for authentication strategies."""

    name: str = ""

    @abstractmethod
    async def authenticate(self, request: Request, db: AsyncSession) -> AuthenticatedUser:
        """
        Establish the requester's identity.

        Raises:
            UnauthorizedError: If the request cannot be authenticated
        """


class LocalStrategy(AuthStrategy):
    """Username/password login against stored users."""

    name = "local"

    async def authenticate(self, request: Request, db: AsyncSession) -> AuthenticatedUser:
        try:
            body = await request.json()
        except (JSONDecodeError, UnicodeDecodeError):
            body = None

        # Same error for every failure so callers can't tell which field was wrong
        if not isinstance(body, dict):
            raise InvalidCredentialsError()
        username = body.get("username")
        password = body.get("password")
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidCredentialsError()

        user = await UserRepository(db).authenticate(username, password)
        if user is None:
            logger.warning(f"Failed login attempt for username: {username}")
            raise InvalidCredentialsError()

        return AuthenticatedUser.from_claims(user.serialize())


class JwtStrategy(AuthStrategy):
    """Bearer token verification. Does not touch the store."""

    name = "jwt"

    async def authenticate(self, request: Request, db: AsyncSession) -> AuthenticatedUser:
        token = extract_token_from_header(request.headers.get("Authorization"))
        payload = verify_token(token)
        try:
            return AuthenticatedUser.from_claims(payload.user)
        except KeyError:
            raise UnauthorizedError()


STRATEGIES: Dict[str, AuthStrategy] = {
    strategy.name: strategy for strategy in (LocalStrategy(), JwtStrategy())
}


def get_strategy(name: str) -> AuthStrategy:
    """Look up a registered strategy by name."""
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown authentication strategy: {name}")
