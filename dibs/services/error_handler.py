"""
Error handling service for consistent error response formatting and logging.
"""

from typing import Optional
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from dibs.utils.exceptions import APIException, InternalServerError, NotFoundError
import logging

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Renders every error kind the API produces.

    Validation and auth errors are JSON with ``code``/``reason``/``message``;
    400 bad requests are plain text; 500s never include internal details.
    """

    @staticmethod
    def render(exception: APIException) -> Response:
        """Build the HTTP response for an API exception."""
        if exception.media_type == "text/plain":
            return PlainTextResponse(
                exception.detail,
                status_code=exception.status_code,
                headers=exception.headers
            )
        return JSONResponse(
            status_code=exception.status_code,
            content=exception.to_dict(),
            headers=exception.headers
        )

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> Response:
        """
        Handle custom API exceptions with structured response.
        """
        logger.warning(
            f"API Exception: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "path": request.url.path if request else None
            }
        )
        return ErrorHandlerService.render(exception)

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> Response:
        """
        Handle framework HTTP exceptions, such as unmatched routes.
        """
        # A known path with an unsupported method is reported as not found too
        if exception.status_code in (404, 405):
            return ErrorHandlerService.render(NotFoundError())

        logger.warning(
            f"HTTP Exception: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "path": request.url.path if request else None
            }
        )
        return JSONResponse(
            status_code=exception.status_code,
            content={"code": exception.status_code, "message": exception.detail},
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> Response:
        """
        Handle framework request validation errors as a single-field ValidationError.
        """
        errors = exception.errors()
        location = None
        message = "Request validation failed"
        if errors:
            loc = [str(part) for part in errors[0].get("loc", ()) if part not in ("body", "path", "query")]
            location = loc[0] if loc else None
            message = errors[0].get("msg", message)

        logger.warning(
            f"Validation Error: {len(errors)} field errors",
            extra={"path": request.url.path if request else None}
        )
        return JSONResponse(
            status_code=422,
            content={
                "code": 422,
                "reason": "ValidationError",
                "message": message,
                "location": location,
            }
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> Response:
        """
        Handle unexpected errors with secure error responses.
        """
        logger.error(
            f"Unexpected Error: {type(exception).__name__} - {str(exception)}",
            extra={
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__,
            },
            exc_info=exception
        )
        return ErrorHandlerService.render(InternalServerError())
