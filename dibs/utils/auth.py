"""
Authentication utilities for JWT token management.
Provides token issuing, verification and Authorization header parsing.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from dibs.config import settings
from dibs.utils.exceptions import InvalidTokenError, TokenExpiredError, UnauthorizedError


class TokenPayload:
    """JWT token payload structure."""

    def __init__(self, username: str, user: Dict[str, Any], exp: datetime):
        self.username = username
        self.user = user
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            username=data["sub"],
            user=data["user"],
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def create_auth_token(
    user: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT carrying the user's public claims.

    Args:
        user: Serialized user (username, firstName, lastName)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiry_minutes)

    to_encode = {
        "user": user,
        "sub": user["username"],
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenPayload:
    """
    Verify signature and expiry of a JWT and decode it.

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the signature or payload is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()

    user = payload.get("user")
    if not payload.get("sub") or not isinstance(user, dict) or "exp" not in payload:
        raise InvalidTokenError("Invalid token payload")

    return TokenPayload.from_dict(payload)


def extract_token_from_header(authorization: Optional[str]) -> str:
    """
    Extract JWT token from Authorization header.

    Raises:
        UnauthorizedError: If header is missing or not a bearer credential
    """
    if not authorization:
        raise UnauthorizedError()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError()
    return parts[1]
