"""Unit tests for the user, role, activity log and system config entity models."""

from __future__ import annotations

import pytest

from readcycle.core.database.entities import (
    SYSTEM_CONFIG_ID,
    ActivityGroup,
    ActivityLog,
    ActivityType,
    Permission,
    Role,
    SystemConfig,
    User,
)


class TestUser:
    """Tests for the User entity."""

    def test_defaults(self):
        user = User(name="Someone", email="someone@readcycle.dev", password="hash")
        assert user.email_verified is False
        assert user.active is True
        assert user.refresh_token is None
        assert user.role_name is None

    def test_role_name(self):
        user = User(name="Someone", email="someone@readcycle.dev", password="hash")
        user.role = Role(name="admin")
        assert user.role_name == "admin"

    def test_repr(self):
        user = User(id=3, name="Someone", email="someone@readcycle.dev", password="hash")
        assert repr(user) == "User(id=3, email=someone@readcycle.dev)"


class TestRole:
    """Tests for the Role entity."""

    @pytest.mark.asyncio
    async def test_role_with_permissions(self, in_memory_session):
        permission = Permission(name="List books", api_path="/api/v1/books", method="GET", module="BOOK")
        role = Role(name="librarian")
        role.permissions = [permission]
        in_memory_session.add(role)
        await in_memory_session.commit()
        await in_memory_session.refresh(role)

        assert role.active is True
        assert [p.name for p in role.permissions] == ["List books"]
        assert repr(role) == f"Role(id={role.id}, name=librarian)"


class TestActivityLog:
    """Tests for the ActivityLog entity."""

    def test_description_round_trip(self):
        entry = ActivityLog(activity_group=ActivityGroup.BOOK, activity_type=ActivityType.UPDATE_BOOK)
        entry.set_description_list([{"key": "title", "value": "Dune → Dune Messiah", "label": "Title"}])

        assert "Dune → Dune Messiah" in entry.description
        assert entry.get_description_list() == [{"key": "title", "value": "Dune → Dune Messiah", "label": "Title"}]

    def test_broken_description(self):
        entry = ActivityLog(activity_group=ActivityGroup.USER, activity_type=ActivityType.CREATE_USER)
        entry.description = "not json"
        assert entry.get_description_list() == []

    def test_execution_time_default(self):
        entry = ActivityLog(activity_group=ActivityGroup.USER, activity_type=ActivityType.DELETE_USER)
        assert entry.execution_time is not None
        assert entry.get_description_list() == []


class TestSystemConfig:
    """Tests for the SystemConfig entity."""

    @pytest.mark.asyncio
    async def test_seeded_row(self, in_memory_session):
        config = await in_memory_session.get(SystemConfig, SYSTEM_CONFIG_ID)
        assert config is not None
        assert config.maintenance_mode is False
