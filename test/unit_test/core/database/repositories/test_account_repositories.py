"""Unit tests for the user, role and permission repositories."""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import select

from readcycle.core.database.entities import Borrow, BorrowStatus, Cart, Permission, User
from readcycle.core.database.filters import PageRequest

pytestmark = pytest.mark.asyncio


async def add_user(repos, sample_user_data, email: str, role: str = "user", **overrides) -> User:
    user = User(**{**sample_user_data, "email": email, **overrides})
    user.role = await repos.roles.get_by_name(role)
    return await repos.users.create(user)


class TestUserRepository:
    """Tests for UserRepository queries."""

    async def test_lookups(self, repos, stored_user):
        stored_user.refresh_token = "refresh"
        stored_user.verification_email_token = "verify"
        await repos.users.update(stored_user)

        assert (await repos.users.get_by_email("member@readcycle.dev")).id == stored_user.id
        assert await repos.users.get_by_email("nobody@readcycle.dev") is None
        assert await repos.users.exists_by_email("member@readcycle.dev") is True
        assert (await repos.users.get_by_refresh_token_and_email("refresh", stored_user.email)).id == stored_user.id
        assert await repos.users.get_by_refresh_token_and_email("refresh", "other@readcycle.dev") is None
        assert (await repos.users.get_by_verification_token("verify")).id == stored_user.id

    async def test_find_by_criteria(self, repos, sample_user_data):
        await add_user(repos, sample_user_data, "member@readcycle.dev")
        await add_user(repos, sample_user_data, "boss@readcycle.dev", role="admin", name="The Boss")
        await add_user(repos, sample_user_data, "young@example.org", date_of_birth=date(2005, 5, 5))

        items, total = await repos.users.find_by_criteria(PageRequest(), email="READCYCLE")
        assert total == 2

        items, _ = await repos.users.find_by_criteria(PageRequest(), role="admin")
        assert [user.email for user in items] == ["boss@readcycle.dev"]

        items, _ = await repos.users.find_by_criteria(PageRequest(), date_of_birth=date(2005, 5, 5))
        assert [user.email for user in items] == ["young@example.org"]

    async def test_count_by_role_name(self, repos, sample_user_data):
        await add_user(repos, sample_user_data, "one@readcycle.dev")
        await add_user(repos, sample_user_data, "two@readcycle.dev")
        await add_user(repos, sample_user_data, "boss@readcycle.dev", role="admin")

        assert await repos.users.count_by_role_name("user") == 2
        assert await repos.users.count_by_role_name("admin") == 1

    async def test_detach_role(self, repos, in_memory_session, stored_user):
        role = await repos.roles.get_by_name("user")
        await repos.users.detach_role(role.id)
        await in_memory_session.commit()

        reloaded = await repos.users.get_by_id(stored_user.id)
        assert reloaded.role_id is None

    async def test_delete_with_history(self, repos, in_memory_session, stored_user, stored_book):
        in_memory_session.add_all(
            [
                Cart(user_id=stored_user.id, book_id=stored_book.id),
                Borrow(user_id=stored_user.id, book_id=stored_book.id, status=BorrowStatus.RETURNED),
            ]
        )
        await in_memory_session.commit()

        await repos.users.delete_with_history(stored_user)
        await in_memory_session.commit()

        assert (await in_memory_session.execute(select(Cart))).first() is None
        assert (await in_memory_session.execute(select(Borrow))).first() is None
        assert await repos.users.get_by_email("member@readcycle.dev") is None


class TestRoleAndPermissionRepositories:
    """Tests for RoleRepository and PermissionRepository."""

    async def test_role_lookups(self, repos):
        assert (await repos.roles.get_by_name("admin")).name == "admin"
        assert await repos.roles.get_by_name("guest") is None
        assert await repos.roles.exists_by_name("user") is True

    async def test_permission_lookups(self, repos):
        first = await repos.permissions.create(
            Permission(name="List books", api_path="/api/v1/books", method="GET", module="BOOK")
        )
        second = await repos.permissions.create(
            Permission(name="Create book", api_path="/api/v1/admin/books", method="POST", module="BOOK")
        )

        found = await repos.permissions.get_by_ids([second.id, first.id, 999])
        assert sorted(p.id for p in found) == [first.id, second.id]
        assert await repos.permissions.get_by_ids([]) == []

        match = await repos.permissions.find_by_module_path_method("BOOK", "/api/v1/books", "GET")
        assert match.id == first.id
        assert await repos.permissions.find_by_module_path_method("BOOK", "/api/v1/books", "POST") is None

    async def test_delete_permission_detaches_roles(self, repos, in_memory_session):
        permission = await repos.permissions.create(
            Permission(name="List books", api_path="/api/v1/books", method="GET", module="BOOK")
        )
        role = await repos.roles.get_by_name("admin")
        role.permissions = [permission]
        await repos.roles.update(role)

        assert await repos.permissions.delete(permission.id) is True
        assert await repos.permissions.delete(permission.id) is False

        role = await repos.roles.get_by_name("admin")
        await in_memory_session.refresh(role)
        assert role.permissions == []
