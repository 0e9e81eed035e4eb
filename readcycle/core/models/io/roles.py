"""
Role and permission I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, require_text


class PermissionWrite(CamelModel):
    """Fields shared by permission creation and update."""

    name: Optional[str] = Field(default=None, validate_default=True)
    api_path: Optional[str] = Field(default=None, validate_default=True)
    method: Optional[str] = Field(default=None, validate_default=True)
    module: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str]) -> str:
        return require_text(value, "Name")

    @field_validator("api_path")
    @classmethod
    def _check_api_path(cls, value: Optional[str]) -> str:
        return require_text(value, "Api path")

    @field_validator("method")
    @classmethod
    def _check_method(cls, value: Optional[str]) -> str:
        return require_text(value, "Method").upper()

    @field_validator("module")
    @classmethod
    def _check_module(cls, value: Optional[str]) -> str:
        return require_text(value, "Module")


class PermissionCreate(PermissionWrite):
    """Schema for creating a permission."""


class PermissionUpdate(PermissionWrite):
    """Schema for updating a permission."""

    id: int


class PermissionRead(CamelModel):
    id: int
    name: str
    api_path: str
    method: str
    module: str
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class PermissionRef(CamelModel):
    """Reference to an existing permission by id."""

    id: int


class RoleWrite(CamelModel):
    name: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    active: bool = True
    permissions: List[PermissionRef] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str]) -> str:
        return require_text(value, "Name")


class RoleCreate(RoleWrite):
    """Schema for creating a role."""


class RoleUpdate(RoleWrite):
    """Schema for updating a role."""

    id: int


class RoleRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    permissions: List[PermissionRead] = Field(default_factory=list)
