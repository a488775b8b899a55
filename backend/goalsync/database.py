"""Database handle and session management."""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Database:
    """Owns the async engine and session factory for the user store.

    Opened once at application startup and closed at shutdown; handlers
    receive sessions through :func:`get_async_db`.
    """

    def __init__(self, url: str, echo: bool = False, create_tables: bool = False):
        self.url = url
        self.echo = echo
        self.create_tables = create_tables
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _engine_options(self) -> dict:
        if self.url.startswith("sqlite"):
            options = {"connect_args": {"check_same_thread": False}}
            if self.url.endswith("://") or ":memory:" in self.url:
                # In-memory SQLite only lives as long as its single connection
                options["poolclass"] = StaticPool
            return options
        return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}

    async def connect(self) -> None:
        """Create the engine and, if configured, the tables."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, echo=self.echo, **self._engine_options())
        self._sessionmaker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        if self.create_tables:
            # Imported for its side effect of registering the tables
            from goalsync import models  # noqa: F401

            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database engine created")

    async def disconnect(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()

    async def ping(self) -> bool:
        """Round-trip a trivial query to check store connectivity."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                result.scalar()
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False


def get_database(request: Request) -> Database:
    """Get the database handle opened by the application lifespan."""
    return request.app.state.database


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get async database session for FastAPI endpoints."""
    async with get_database(request).session() as session:
        yield session
