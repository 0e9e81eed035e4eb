"""
Role and Permission Service.
"""

from __future__ import annotations

from typing import List, Optional

from readcycle.core.database.entities import Permission, Role, User
from readcycle.core.database.filters import PageRequest
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.exceptions import InvalidError
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import (
    PermissionCreate,
    PermissionRead,
    PermissionUpdate,
    ResultPaginate,
    RoleCreate,
    RoleRead,
    RoleUpdate,
    build_page,
)
from readcycle.core.models.io.roles import PermissionRef

logger = get_logger(__name__)


class RoleService:
    """Role administration."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def _get_role(self, role_id: int) -> Role:
        role = await self.repos.roles.get_by_id(role_id)
        if role is None:
            raise InvalidError(f"Role with id: {role_id} does not exist")
        return role

    async def _permissions(self, refs: List[PermissionRef]) -> List[Permission]:
        return await self.repos.permissions.get_by_ids([ref.id for ref in refs])

    async def get_role(self, role_id: int) -> RoleRead:
        return RoleRead.model_validate(await self._get_role(role_id))

    async def list_roles(self, page: PageRequest, expression: Optional[str] = None) -> ResultPaginate:
        items, total = await self.repos.roles.find_page(page, expression)
        return build_page(items, total, page.page, page.size, converter=RoleRead.model_validate)

    async def create_role(self, payload: RoleCreate, actor: User) -> RoleRead:
        if await self.repos.roles.exists_by_name(payload.name):
            raise InvalidError(f"Role with name: {payload.name} already exists")
        role = Role(
            name=payload.name,
            description=payload.description,
            active=payload.active,
            created_by=actor.email,
        )
        role.permissions = await self._permissions(payload.permissions)
        role = await self.repos.roles.create(role)
        logger.info(f"Role {role.name} created by {actor.email}")
        return RoleRead.model_validate(role)

    async def update_role(self, payload: RoleUpdate, actor: User) -> RoleRead:
        role = await self._get_role(payload.id)
        if payload.name != role.name and await self.repos.roles.exists_by_name(payload.name):
            raise InvalidError(f"Role with name: {payload.name} already exists")
        role.name = payload.name
        role.description = payload.description
        role.active = payload.active
        role.permissions = await self._permissions(payload.permissions)
        role.updated_by = actor.email
        role = await self.repos.roles.update(role)
        return RoleRead.model_validate(role)

    async def delete_role(self, role_id: int) -> None:
        """Delete a role; users holding it are left without a role."""
        role = await self._get_role(role_id)
        try:
            await self.repos.users.detach_role(role.id)
            role.permissions = []
            await self.repos.session.delete(role)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        logger.info(f"Role {role_id} deleted")


class PermissionService:
    """Permission administration."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def _get_permission(self, permission_id: int) -> Permission:
        permission = await self.repos.permissions.get_by_id(permission_id)
        if permission is None:
            raise InvalidError(f"Permission with id: {permission_id} does not exist.")
        return permission

    async def _ensure_unique(self, module: str, api_path: str, method: str, current_id: Optional[int] = None) -> None:
        existing = await self.repos.permissions.find_by_module_path_method(module, api_path, method)
        if existing is not None and existing.id != current_id:
            raise InvalidError("Permission already exists")

    async def get_permission(self, permission_id: int) -> PermissionRead:
        return PermissionRead.model_validate(await self._get_permission(permission_id))

    async def list_permissions(self, page: PageRequest, expression: Optional[str] = None) -> ResultPaginate:
        items, total = await self.repos.permissions.find_page(page, expression)
        return build_page(items, total, page.page, page.size, converter=PermissionRead.model_validate)

    async def create_permission(self, payload: PermissionCreate, actor: User) -> PermissionRead:
        await self._ensure_unique(payload.module, payload.api_path, payload.method)
        permission = Permission(
            name=payload.name,
            api_path=payload.api_path,
            method=payload.method,
            module=payload.module,
            created_by=actor.email,
        )
        permission = await self.repos.permissions.create(permission)
        return PermissionRead.model_validate(permission)

    async def update_permission(self, payload: PermissionUpdate, actor: User) -> PermissionRead:
        permission = await self._get_permission(payload.id)
        await self._ensure_unique(payload.module, payload.api_path, payload.method, current_id=permission.id)
        permission.name = payload.name
        permission.api_path = payload.api_path
        permission.method = payload.method
        permission.module = payload.module
        permission.updated_by = actor.email
        permission = await self.repos.permissions.update(permission)
        return PermissionRead.model_validate(permission)

    async def delete_permission(self, permission_id: int) -> None:
        if not await self.repos.permissions.delete(permission_id):
            raise InvalidError(f"Permission with id: {permission_id} does not exist.")
