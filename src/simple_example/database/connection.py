"""
Database engine and session management
"""

import logging
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from simple_example.config import settings
from simple_example.database.entities import Base

logger = logging.getLogger(__name__)

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def _engine_options(database_url: str) -> dict:
    """Build create_async_engine keyword arguments for the given backend"""
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live inside a single connection
        if ":memory:" in database_url or database_url.rstrip("/") in ("sqlite+aiosqlite:", "sqlite:"):
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_size": settings.DB_POOL_MIN_SIZE,
        "max_overflow": max(settings.DB_POOL_MAX_SIZE - settings.DB_POOL_MIN_SIZE, 0),
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": settings.DB_COMMAND_TIMEOUT,
            "statement_cache_size": 0  # Fix for pgbouncer compatibility
        }
    }


async def init_database(database_url: Optional[str] = None, create_schema: Optional[bool] = None):
    """Initialize database engine, session factory and (optionally) the schema"""
    global _engine, _session_factory

    database_url = database_url or settings.DATABASE_URL
    if create_schema is None:
        create_schema = settings.DB_CREATE_SCHEMA

    _engine = create_async_engine(database_url, **_engine_options(database_url))
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)

    # Test connection
    async with _engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if create_schema:
            await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized successfully")


async def close_database():
    """Dispose the engine and its connection pool"""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database connections closed")


def get_engine() -> AsyncEngine:
    """Get the engine instance"""
    if _engine is None:
        raise RuntimeError("Database has not been initialized")
    return _engine


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a request-scoped session"""
    if _session_factory is None:
        raise RuntimeError("Database has not been initialized")
    async with _session_factory() as session:
        yield session
