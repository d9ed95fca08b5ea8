"""
API route handlers for the Dibs API.
"""

from .auth import router as auth_router
from .dibs import router as dibs_router
from .protected import router as protected_router
from .users import router as users_router

__all__ = ["auth_router", "dibs_router", "protected_router", "users_router"]
