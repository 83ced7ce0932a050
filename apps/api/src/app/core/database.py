"""
Database Configuration

Async SQLAlchemy engine and session management.

The engine is owned by a Database instance that is created once in the
application lifespan, stored on ``app.state.db`` and disposed on shutdown.
Request handlers receive sessions through the ``get_db`` dependency.
"""

import logging
from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Owns the async engine (connection pool) and session factory."""

    def __init__(self, url: str, *, echo: bool = False, pool_size: int | None = None):
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if pool_size is not None:
            engine_kwargs["pool_size"] = pool_size

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    async def create_tables(self) -> None:
        """Create any missing tables (development convenience)."""
        # Import models so they register on Base.metadata
        from app.modules.schools.models import School  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close pooled connections."""
        await self.engine.dispose()


def create_database(app_settings: Settings = settings) -> Database:
    """Build the Database from settings. No connection is opened yet."""
    return Database(
        app_settings.database_url,
        echo=app_settings.database_echo,
        pool_size=app_settings.database_pool_size,
    )


async def init_db(database: Database, app_settings: Settings = settings) -> None:
    """
    Verify connectivity and, in development, create missing tables.

    Call this on application startup.
    """
    await database.ping()
    if app_settings.is_development:
        await database.create_tables()


async def close_db(database: Database | None) -> None:
    """Dispose the engine, draining pooled connections."""
    if database is not None:
        await database.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Yield a database session bound to the application's Database.

    Usage in FastAPI:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.db
    async with database.session_maker() as session:
        yield session
