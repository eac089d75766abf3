"""
Database Connection Module
Handles the async SQLAlchemy engine behind an explicit, injectable handle.

The application builds one Database per process in its lifespan hook and
stores it on app.state; routes receive a per-request AsyncSession through
the get_db dependency.
"""

import logging
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from food_delivery.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

# Errors that mean "the store cannot be reached", as opposed to bad SQL
CONNECTION_ERRORS = (OperationalError, InterfaceError, OSError)


# Base class for all our models
class Base(DeclarativeBase):
    pass


class Database:
    """
    Owns the engine and session factory for one application instance.

    Args:
        url: SQLAlchemy async URL (postgresql+psycopg://..., sqlite+aiosqlite://...)
        echo: Log all SQL statements
        connect_attempts: Attempts made by connect() before giving up
        backoff_max: Upper bound in seconds of the exponential backoff
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        connect_attempts: int = 5,
        backoff_max: float = 10.0,
    ):
        self.url = url
        self.echo = echo
        self.connect_attempts = connect_attempts
        self.backoff_max = backoff_max
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreUnavailable("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """
        Create the engine, verify connectivity and create missing tables.

        Retries with exponential backoff on connection errors.

        Raises:
            StoreUnavailable: If every attempt failed
        """
        # Register every table on Base.metadata before create_all
        from food_delivery import models  # noqa: F401

        engine = create_async_engine(self.url, echo=self.echo, pool_pre_ping=True)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.connect_attempts),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=self.backoff_max),
                retry=retry_if_exception_type(CONNECTION_ERRORS),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=False,
            ):
                with attempt:
                    async with engine.begin() as conn:
                        await conn.run_sync(Base.metadata.create_all)
        except RetryError as e:
            await engine.dispose()
            cause = e.last_attempt.exception()
            logger.error(
                f"Could not connect to database after {self.connect_attempts} attempts: {cause}"
            )
            raise StoreUnavailable("Could not connect to the database") from cause
        except Exception:
            await engine.dispose()
            raise

        self._engine = engine
        self._session_maker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Objects remain accessible after commit
        )
        logger.info("Database connected and tables ready")

    async def disconnect(self) -> None:
        """Dispose of the engine. Safe to call when not connected."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            logger.info("Database connection closed")

    def session(self) -> AsyncSession:
        if self._session_maker is None:
            raise StoreUnavailable("Database is not connected")
        return self._session_maker()

    async def ping(self) -> bool:
        """Round-trip a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (StoreUnavailable, *CONNECTION_ERRORS) as e:
            logger.error(f"Database health check failed: {e}")
            return False


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session and ensures cleanup.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        finally:
            await session.close()
