"""Async database engine and session management."""

from functools import lru_cache
from typing import Optional

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from autoscale_rules.config import Settings, get_settings

# Shared metadata for the document collections
metadata = MetaData()


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create an async engine from settings."""
    settings = settings or get_settings()
    kwargs: dict = {"echo": settings.database_echo}
    if not settings.database_url.startswith("sqlite"):
        kwargs["pool_size"] = settings.database_pool_size
        kwargs["max_overflow"] = settings.database_max_overflow
        kwargs["pool_pre_ping"] = True
    return create_async_engine(settings.database_url, **kwargs)


@lru_cache
def get_engine() -> AsyncEngine:
    """Get the cached process-wide engine."""
    return create_engine(get_settings())


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
