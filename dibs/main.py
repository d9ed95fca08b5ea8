"""
FastAPI application entry point.
Builds the application: routers, middleware, exception handlers and lifespan.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import asyncio
import logging

from dibs.config import settings
from dibs.database import Database
from dibs.middleware import RequestLoggingMiddleware
from dibs.routers import auth_router, dibs_router, protected_router, users_router
from dibs.services.error_handler import ErrorHandlerService
from dibs.utils.exceptions import APIException

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Connects the database unless a Server (or test) already did.
    """
    database: Database = app.state.database
    owns_connection = not database.connected
    if owns_connection:
        await database.connect()

    yield

    if owns_connection:
        await database.disconnect()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create a FastAPI application bound to a database.

    Args:
        database: Store handle; defaults to one for ``settings.database_url``

    Returns:
        Configured FastAPI application
    """
    if database is None:
        database = Database(settings.database_url, echo=settings.debug)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        Properties, reservations and user accounts for a small booking service.

        Use `/api/auth/login` to obtain a JWT, then send it in the Authorization
        header as `Bearer <token>`.
        """,
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(users_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(dibs_router, prefix=settings.api_prefix)
    app.include_router(protected_router, prefix=settings.api_prefix)

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions with structured error responses."""
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched routes end up here as JSON 404s."""
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return ErrorHandlerService.handle_unexpected_error(exc, request)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve ``app`` until interrupted."""
    from dibs.server import serve_forever

    asyncio.run(serve_forever(app, app.state.database, settings.host, settings.port))


if __name__ == "__main__":
    run()
