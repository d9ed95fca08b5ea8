"""
User registration endpoint.
"""

from fastapi import APIRouter, Depends, Request, status
from typing import Any, Dict
import logging

from dibs.repositories.user import UserRepository
from dibs.schemas.user import UserResponse
from dibs.utils.dependencies import get_user_repository
from dibs.utils.exceptions import APIException, InternalServerError
from dibs.utils.validators import (
    SizeLimit,
    read_json_body,
    check_required_fields,
    check_string_fields,
    check_trimmed_fields,
    check_sized_fields
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

REQUIRED_FIELDS = ["username", "password"]
STRING_FIELDS = ["username", "password", "firstName", "lastName"]
# Usernames and passwords are used verbatim, so surrounding whitespace is an error
EXPLICITLY_TRIMMED_FIELDS = ["username", "password"]
SIZED_FIELDS = {
    "username": SizeLimit(min=1),
    # bcrypt only looks at the first 72 bytes
    "password": SizeLimit(min=10, max=72),
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    summary="Register a new user"
)
async def register_user(
    request: Request,
    user_repo: UserRepository = Depends(get_user_repository)
) -> Dict[str, Any]:
    """
    Register a new user.

    Returns:
        The created user, without the password hash

    Raises:
        ValidationError: On a missing, mistyped, padded or badly sized field,
            or a username that is already taken
    """
    body = await read_json_body(request)
    check_required_fields(body, REQUIRED_FIELDS)
    check_string_fields(body, STRING_FIELDS)
    check_trimmed_fields(body, EXPLICITLY_TRIMMED_FIELDS)
    check_sized_fields(body, SIZED_FIELDS)

    try:
        user = await user_repo.create_user({
            "username": body["username"],
            "password": body["password"],
            "first_name": body.get("firstName", "").strip(),
            "last_name": body.get("lastName", "").strip(),
        })
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to register user {body['username']}: {e}")
        raise InternalServerError()

    return user.serialize()
