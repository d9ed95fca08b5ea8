"""
Authentication API endpoints for login and token refresh.
"""

from fastapi import APIRouter, Depends, status
from typing import Dict

from dibs.schemas.auth import AuthTokenResponse
from dibs.services.auth import AuthenticatedUser
from dibs.utils.auth import create_auth_token
from dibs.utils.dependencies import jwt_auth, local_auth


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthTokenResponse,
    summary="User login",
    description="Authenticate with username and password, returns a JWT"
)
async def login(current_user: AuthenticatedUser = Depends(local_auth)) -> Dict[str, str]:
    """
    Issue a token for a user whose credentials the local strategy accepted.
    """
    return {"authToken": create_auth_token(current_user.serialize())}


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=AuthTokenResponse,
    summary="Refresh token",
    description="Exchange a valid JWT for a new one with a fresh expiry"
)
async def refresh_token(current_user: AuthenticatedUser = Depends(jwt_auth)) -> Dict[str, str]:
    return {"authToken": create_auth_token(current_user.serialize())}
