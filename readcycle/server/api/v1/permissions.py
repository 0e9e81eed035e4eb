"""
Permissions API Endpoints.

Administrative CRUD on permissions. A permission names one API operation by
module, path and HTTP method.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from readcycle.core.models.io import (
    PermissionCreate,
    PermissionRead,
    PermissionUpdate,
    ResultPaginate,
    ResultResponse,
    build_response,
)
from readcycle.server.services.deps import AdminDep, PageDep, PermissionServiceDep

router = APIRouter()


@router.get(
    "/{permission_id}",
    response_model=ResultResponse[PermissionRead],
    summary="Get Permission",
    responses={400: {"description": "Permission does not exist"}},
)
async def get_permission(permission_id: int, _: AdminDep, permissions: PermissionServiceDep):
    return build_response(await permissions.get_permission(permission_id), "Get permission by id")


@router.get(
    "",
    response_model=ResultResponse[ResultPaginate[PermissionRead]],
    summary="List Permissions",
    description="Paginated list of permissions, optionally narrowed with a filter expression.",
)
async def list_permissions(
    _: AdminDep,
    permissions: PermissionServiceDep,
    page: PageDep,
    filter: Optional[str] = Query(default=None, description="Filter expression"),
):
    return build_response(await permissions.list_permissions(page, filter), "Get permissions")


@router.post(
    "",
    response_model=ResultResponse[PermissionRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Permission",
    responses={400: {"description": "Missing fields or the same module, path and method already exist"}},
)
async def create_permission(payload: PermissionCreate, admin: AdminDep, permissions: PermissionServiceDep):
    data = await permissions.create_permission(payload, admin)
    return build_response(data, "Create a permission", status.HTTP_201_CREATED)


@router.put(
    "",
    response_model=ResultResponse[PermissionRead],
    summary="Update Permission",
    responses={400: {"description": "Permission does not exist or would duplicate another one"}},
)
async def update_permission(payload: PermissionUpdate, admin: AdminDep, permissions: PermissionServiceDep):
    return build_response(await permissions.update_permission(payload, admin), "Update a permission")


@router.delete(
    "/{permission_id}",
    response_model=ResultResponse[None],
    summary="Delete Permission",
    description="Delete a permission and detach it from every role.",
    responses={400: {"description": "Permission does not exist"}},
)
async def delete_permission(permission_id: int, _: AdminDep, permissions: PermissionServiceDep):
    await permissions.delete_permission(permission_id)
    return build_response(None, "delete a permission")
