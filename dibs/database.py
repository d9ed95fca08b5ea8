"""
Database connection and session management.
Owns the async SQLAlchemy engine and session factory for one application instance.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool
from sqlalchemy import text, DateTime, String, func
from fastapi import Request
from typing import Any, AsyncGenerator, ClassVar, Dict
from datetime import datetime
import logging
import uuid

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Includes common fields: id, created_at, updated_at.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Public (camelCase) field name -> model attribute
    api_fields: ClassVar[Dict[str, str]] = {}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    @classmethod
    def attributes_from_api(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Map the known public fields present in a request body to model attributes.
        Unknown keys, including ``id``, are dropped.
        """
        return {
            attribute: data[field]
            for field, attribute in cls.api_fields.items()
            if field in data
        }


class Database:
    """
    Store connection handle.

    Created once per application and passed to whatever needs it: the
    FastAPI app keeps it on ``app.state.database`` and the ``Server``
    lifecycle object connects and disconnects it.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_options = {"echo": echo}
        if url.startswith("sqlite"):
            # In-memory SQLite lives as long as its single connection
            engine_options["poolclass"] = StaticPool
            engine_options["connect_args"] = {"check_same_thread": False}
        else:
            engine_options.update(
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(url, **engine_options)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.connected = False

    async def connect(self) -> None:
        """
        Create tables and check connectivity.
        Safe to call more than once.
        """
        if self.connected:
            return

        # Models register themselves on Base.metadata when imported
        import dibs.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.execute(text("SELECT 1"))
        self.connected = True
        logger.info("Database connection successful")

    async def disconnect(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()
        self.connected = False
        logger.info("Database connections closed")

    async def drop_tables(self) -> None:
        """Drop all tables. Used by the test suite."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield an async database session and ensure it's closed after use.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get database session for the app handling the request.
    """
    database: Database = request.app.state.database
    async for session in database.session():
        yield session
