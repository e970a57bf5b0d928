"""
Database configuration and async session management (SQL storage backend)
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from eventfinder.core.config import settings

# Create declarative base for models
Base = declarative_base()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases"""
    kwargs = {"echo": echo, "future": True}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_pre_ping=True,  # Verify connections before using
            pool_size=10,
            max_overflow=20,
        )
    return create_async_engine(database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use"""
    global _engine
    if _engine is None:
        _engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    return _engine


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database tables.
    Only for development - use migrations in production.
    """
    # Import all models to register them with Base
    from eventfinder import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: Optional[AsyncEngine] = None) -> None:
    """
    Drop all database tables.
    WARNING: Use only in development/testing!
    """
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
