"""
Custom exception classes for the Dibs API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    media_type = "application/json"

    def __init__(
        self,
        status_code: int,
        detail: str,
        reason: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        """Public JSON body for this error."""
        body = {"code": self.status_code, "message": self.detail}
        if self.reason:
            body["reason"] = self.reason
        return body


class ValidationError(APIException):
    """
    Input validation failure naming the single offending field.
    """

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=message,
            reason="ValidationError"
        )
        self.location = location

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["location"] = self.location
        return body


class BadRequestError(APIException):
    """Bad request exception, rendered as plain text."""

    media_type = "text/plain"

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            reason="BadRequest"
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            reason="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"}
        )


class NotFoundError(APIException):
    """Unmatched route exception."""

    def __init__(self, detail: str = "Not Found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            reason="NotFound"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.detail}


class InternalServerError(APIException):
    """Internal server error exception. Never carries storage details."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail
        )


# Authentication specific exceptions
class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Incorrect username or password"):
        super().__init__(detail)


class TokenExpiredError(UnauthorizedError):
    """JWT token expired exception."""

    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid JWT token exception."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)
