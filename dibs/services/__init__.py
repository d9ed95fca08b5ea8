"""
Service layer: authentication strategies and error rendering.
"""

from .auth import AuthenticatedUser, AuthStrategy, LocalStrategy, JwtStrategy, get_strategy
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthenticatedUser",
    "AuthStrategy",
    "LocalStrategy",
    "JwtStrategy",
    "get_strategy",
    "ErrorHandlerService"
]
