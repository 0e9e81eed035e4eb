"""
Role and permission repositories.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.roles import Permission, Role, RolePermissionLink
from .base import SQLModelRepository


class RoleRepository(SQLModelRepository[Role]):
    """Repository for role data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Role)

    async def get_by_name(self, name: str) -> Optional[Role]:
        stmt = select(Role).where(Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_name(self, name: str) -> bool:
        return await self.get_by_name(name) is not None


class PermissionRepository(SQLModelRepository[Permission]):
    """Repository for permission data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Permission)

    async def get_by_ids(self, ids: Sequence[int]) -> List[Permission]:
        if not ids:
            return []
        stmt = select(Permission).where(Permission.id.in_(list(ids))).order_by(Permission.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_module_path_method(self, module: str, api_path: str, method: str) -> Optional[Permission]:
        stmt = select(Permission).where(
            (Permission.module == module) & (Permission.api_path == api_path) & (Permission.method == method)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def delete(self, entity_id: int) -> bool:
        """Delete a permission after detaching it from every role."""
        permission = await self.get_by_id(entity_id)
        if permission is None:
            return False
        await self.session.execute(sa_delete(RolePermissionLink).where(RolePermissionLink.permission_id == entity_id))
        await self.session.delete(permission)
        await self.session.commit()
        return True
