"""
Utility modules for the Dibs API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    BadRequestError,
    UnauthorizedError,
    NotFoundError,
    InternalServerError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError
)

# Token helpers live in dibs.utils.auth and strategies in dibs.services.auth,
# kept out of this package namespace to avoid importing models from here

__all__ = [
    "APIException",
    "ValidationError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "InternalServerError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
]
