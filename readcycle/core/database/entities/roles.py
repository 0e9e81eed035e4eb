"""
Role and permission entity models.

Roles group permissions; a user holds at most one role. Permissions describe
one API operation (module, path and HTTP method).
"""

from typing import List, Optional

from sqlmodel import Field, Relationship

from ..base import AuditedBase, Base


class RolePermissionLink(Base, table=True):
    """Association between roles and permissions.

    Table: permission_role
    """

    __tablename__ = "permission_role"

    role_id: Optional[int] = Field(default=None, foreign_key="roles.id", primary_key=True)
    permission_id: Optional[int] = Field(default=None, foreign_key="permissions.id", primary_key=True)


class PermissionBase(AuditedBase):
    """Base fields for a permission."""

    name: str = Field(max_length=255, description="Human readable permission name")
    api_path: str = Field(max_length=255, description="Route path the permission covers")
    method: str = Field(max_length=16, description="HTTP method")
    module: str = Field(max_length=100, description="Functional module (e.g. BOOKS, USERS)")


class Permission(PermissionBase, table=True):
    """Persistent permission.

    Table: permissions
    """

    __tablename__ = "permissions"

    id: Optional[int] = Field(default=None, primary_key=True)


class RoleBase(AuditedBase):
    """Base fields for a role."""

    name: str = Field(max_length=50, unique=True, index=True, description="Role name (e.g. admin, user)")
    description: Optional[str] = Field(default=None, max_length=255, description="Role description")
    active: bool = Field(default=True, description="Whether the role can be assigned")


class Role(RoleBase, table=True):
    """Persistent role with its permissions.

    Table: roles
    """

    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)

    permissions: List[Permission] = Relationship(
        link_model=RolePermissionLink,
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name={self.name})"
