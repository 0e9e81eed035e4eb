"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from readcycle.core.logging_config import get_logger
from readcycle.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker, seed_defaults

logger = get_logger(__name__)

engine = create_engine(settings.database.url, echo=settings.database.echo)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    In production Alembic migrations own the schema and seed rows, so this
    does nothing unless ``READCYCLE_AUTO_CREATE_TABLES`` is enabled, in which
    case tables are created and the default rows are seeded.
    """
    if not settings.database.auto_create_tables:
        logger.debug("Automatic table creation disabled; relying on Alembic migrations")
        return

    await create_all(engine)
    async with async_session_maker() as session:
        await seed_defaults(session)
    logger.info("Database tables created")
