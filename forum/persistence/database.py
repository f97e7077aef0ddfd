"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.config import Settings
from forum.domain.error import StoreUnavailableError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate connection-level database failures into a domain error.

    Constraint violations are left alone; repositories handle those where
    they mean something (e.g. a duplicate vote). Other driver errors
    propagate and are rendered as internal errors by the API.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        raise StoreUnavailableError("Database unavailable") from e
    except DBAPIError as e:
        if e.connection_invalidated:
            raise StoreUnavailableError("Database connection lost") from e
        raise
