"""
Database utility functions for engine and session management.

Functions:
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all: Creates all tables from ORM metadata (for tests/dev)
- seed_defaults: Inserts the default roles and the system config row
"""

from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel, select

from readcycle.core.logging_config import get_logger

from . import entities  # noqa: F401
from .entities import SYSTEM_CONFIG_ID, Role, SystemConfig

logger = get_logger(__name__)

DEFAULT_ROLES = (
    ("admin", "Administrator with access to the management APIs"),
    ("user", "Library member"),
)


def create_engine(db_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    The helper normalizes Postgres URLs to ensure the async driver is used.
    For example, it rewrites ``postgresql://`` and other variants to
    ``postgresql+asyncpg://``.

    Args:
        db_url: Database connection URL
        echo: Echo emitted SQL

    Returns:
        Configured AsyncEngine instance
    """
    url = re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)
    return create_async_engine(url, pool_pre_ping=True, echo=echo)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    This is mainly intended for tests and local development.
    Production should use Alembic migrations instead.

    Args:
        engine: Async SQLAlchemy engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def seed_defaults(session: AsyncSession) -> None:
    """Insert the default roles and the system config row when missing.

    Args:
        session: Open async session; committed when anything was added
    """
    added = False
    for name, description in DEFAULT_ROLES:
        result = await session.execute(select(Role).where(Role.name == name))
        if result.scalar_one_or_none() is None:
            session.add(Role(name=name, description=description, active=True, created_by="system"))
            added = True

    if await session.get(SystemConfig, SYSTEM_CONFIG_ID) is None:
        session.add(SystemConfig(id=SYSTEM_CONFIG_ID, maintenance_mode=False, created_by="system"))
        added = True

    if added:
        await session.commit()
        logger.info("Seeded default roles and system configuration")
