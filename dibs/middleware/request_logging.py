"""
Request logging middleware.
Writes one access-log line per request, in the spirit of a common log format.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log method, path, status and processing time of every request.
    Adds an ``X-Request-ID`` header to each response.
    """

    def __init__(self, app: ASGIApp, logger_name: str = __name__):
        super().__init__(app)
        self.access_logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.time()

        response = await call_next(request)

        processing_time = time.time() - start_time
        client = request.client.host if request.client else "-"
        self.access_logger.info(
            f'{client} "{request.method} {request.url.path}" '
            f"{response.status_code} {processing_time * 1000:.1f}ms [{request_id}]",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "processing_time": processing_time
            }
        )
        response.headers["X-Request-ID"] = request_id
        return response
