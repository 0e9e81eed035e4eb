from datetime import date
from typing import AsyncGenerator, Awaitable, Callable
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select
from sqlmodel.pool import StaticPool

from readcycle.core.database import entities  # noqa: F401
from readcycle.core.database.entities import Book, BookStatus, Borrow, BorrowStatus, Role, User
from readcycle.core.database.utils import seed_defaults
from readcycle.server.services.security import create_access_token, hash_password

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "secret123"
# bcrypt is slow on purpose; hash once per test run
DEFAULT_PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine, with the default rows seeded."""
    factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with factory() as session:
        await seed_defaults(session)
    return factory


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_factory, session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from readcycle.core.database import get_session
    from readcycle.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    # The maintenance gate opens its own sessions
    app.state.session_factory = session_factory
    app.state.maintenance_since = None

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("readcycle.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
    del app.state.session_factory
    app.state.maintenance_since = None


async def _create_account(
    session: AsyncSession,
    name: str,
    email: str,
    role_name: str,
    verified: bool = True,
    active: bool = True,
) -> User:
    role = (await session.execute(select(Role).where(Role.name == role_name))).scalar_one()
    user = User(
        name=name,
        email=email,
        password=DEFAULT_PASSWORD_HASH,
        date_of_birth=date(1990, 1, 15),
        email_verified=verified,
        active=active,
        created_by="test",
    )
    user.role = role
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
def account_factory(session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Create accounts holding the given role."""

    async def _factory(name: str, email: str, role_name: str = "user", **kwargs) -> User:
        return await _create_account(session, name, email, role_name, **kwargs)

    return _factory


@pytest_asyncio.fixture
async def admin_user(account_factory) -> User:
    return await account_factory("Admin Person", "admin@readcycle.dev", "admin")


@pytest_asyncio.fixture
async def member_user(account_factory) -> User:
    return await account_factory("Member Person", "member@readcycle.dev", "user")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return bearer(admin_user)


@pytest.fixture
def member_headers(member_user: User) -> dict:
    return bearer(member_user)


@pytest.fixture
def book_factory(session: AsyncSession) -> Callable[..., Awaitable[Book]]:
    """Insert books straight into the database."""

    async def _factory(title: str = "Dune", **overrides) -> Book:
        values = {
            "category": "Novel",
            "title": title,
            "author": "Frank Herbert",
            "publisher": "Chilton Books",
            "quantity": 3,
            "status": BookStatus.AVAILABLE,
            "is_active": True,
            "created_by": "test",
        }
        values.update(overrides)
        book = Book(**values)
        session.add(book)
        await session.commit()
        await session.refresh(book)
        return book

    return _factory


@pytest.fixture
def borrow_factory(session: AsyncSession) -> Callable[..., Awaitable[Borrow]]:
    """Insert borrow records straight into the database."""

    async def _factory(user: User, book: Book, status: BorrowStatus = BorrowStatus.BORROWED) -> Borrow:
        borrow = Borrow(user_id=user.id, book_id=book.id, status=status, created_by=user.email)
        session.add(borrow)
        await session.commit()
        await session.refresh(borrow)
        return borrow

    return _factory
