"""Test configuration for database unit tests.

This module provides common fixtures for testing the database layer against
an in-memory SQLite database.
"""

from __future__ import annotations

from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.pool import StaticPool

from readcycle.core.database import entities  # noqa: F401
from readcycle.core.database.entities import Book, BookStatus, User
from readcycle.core.database.repositories import RepositoryBundle, build_repositories
from readcycle.core.database.utils import seed_defaults


@pytest_asyncio.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session with the default roles seeded."""
    async_session = async_sessionmaker(bind=in_memory_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        await seed_defaults(session)
        yield session


@pytest.fixture
def repos(in_memory_session) -> RepositoryBundle:
    return build_repositories(in_memory_session)


@pytest.fixture(scope="function")
def sample_book_data() -> dict:
    """Sample book data for testing."""
    return {
        "category": "Novel",
        "title": "Dune",
        "author": "Frank Herbert",
        "publisher": "Chilton Books",
        "quantity": 3,
        "status": BookStatus.AVAILABLE,
        "is_active": True,
        "created_by": "test",
    }


@pytest.fixture(scope="function")
def sample_user_data() -> dict:
    """Sample user data for testing."""
    return {
        "name": "Member Person",
        "email": "member@readcycle.dev",
        "password": "$2b$12$hash",
        "date_of_birth": date(1990, 1, 15),
        "email_verified": True,
        "active": True,
        "created_by": "test",
    }


@pytest_asyncio.fixture
async def stored_book(repos, sample_book_data) -> Book:
    return await repos.books.create(Book(**sample_book_data))


@pytest_asyncio.fixture
async def stored_user(repos, sample_user_data) -> User:
    user = User(**sample_user_data)
    user.role = await repos.roles.get_by_name("user")
    return await repos.users.create(user)
