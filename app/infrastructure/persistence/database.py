"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.
Tables are created with Base.metadata.create_all when
DATABASE_AUTO_CREATE is on (see app.core.lifespan); there are no
migrations in this service.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings
from app.domain.exceptions import BackingStoreException

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    if settings.database_url.startswith("postgresql"):
        engine_kwargs.update(
            pool_size=settings.db_pool_size if settings.db_pool_size is not None else 20,
            max_overflow=(
                settings.db_max_overflow if settings.db_max_overflow is not None else 30
            ),
            pool_recycle=3600,
            connect_args={"command_timeout": 60},
        )
    engine = create_async_engine(settings.database_url, **engine_kwargs)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def get_engine() -> AsyncEngine:
    """Return the (lazily created) async engine."""
    _ensure_engine()
    return engine


async def create_tables() -> None:
    """Create all tables that do not exist yet (development bootstrap)."""
    # Import models so they register on Base.metadata.
    from app.infrastructure.persistence import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    """Close pooled connections. Call on app shutdown."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


def _session_factory() -> async_sessionmaker[AsyncSession]:
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    async with _session_factory()() as session:
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """Database session dependency for write operations.

    Commits whatever is still pending on success; closing the session
    rolls back on exception. Services may commit earlier through their
    repository (before invalidating caches). Use for POST, PUT, PATCH,
    DELETE endpoints. A failed commit surfaces as BackingStoreException.
    """
    async with _session_factory()() as session:
        try:
            yield session
            if session.in_transaction():
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception("Transaction failed")
            raise BackingStoreException("commit", str(e)) from e
