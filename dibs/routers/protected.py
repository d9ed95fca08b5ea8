"""
Protected demo endpoint; only reachable with a valid bearer token.
"""

from fastapi import APIRouter, Depends
from typing import Dict

from dibs.schemas.auth import ProtectedResponse
from dibs.services.auth import AuthenticatedUser
from dibs.utils.dependencies import jwt_auth


router = APIRouter(tags=["Authentication"])


@router.get("/protected", response_model=ProtectedResponse, summary="Protected endpoint")
async def protected(current_user: AuthenticatedUser = Depends(jwt_auth)) -> Dict[str, str]:
    return {"data": "rosebud"}
