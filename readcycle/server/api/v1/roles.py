"""
Roles API Endpoints.

Administrative CRUD on roles and the permissions attached to them.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from readcycle.core.models.io import ResultPaginate, ResultResponse, RoleCreate, RoleRead, RoleUpdate, build_response
from readcycle.server.services.deps import AdminDep, PageDep, RoleServiceDep

router = APIRouter()


@router.get(
    "/{role_id}",
    response_model=ResultResponse[RoleRead],
    summary="Get Role",
    description="Retrieve a role with its permissions.",
    responses={400: {"description": "Role does not exist"}},
)
async def get_role(role_id: int, _: AdminDep, roles: RoleServiceDep):
    return build_response(await roles.get_role(role_id), "Get role by id")


@router.get(
    "",
    response_model=ResultResponse[ResultPaginate[RoleRead]],
    summary="List Roles",
    description="Paginated list of roles, optionally narrowed with a filter expression.",
)
async def list_roles(
    _: AdminDep,
    roles: RoleServiceDep,
    page: PageDep,
    filter: Optional[str] = Query(default=None, description="Filter expression"),
):
    return build_response(await roles.list_roles(page, filter), "Get roles")


@router.post(
    "",
    response_model=ResultResponse[RoleRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Role",
    description="Create a role; permissions are attached by id.",
    responses={400: {"description": "Invalid data or role name already exists"}},
)
async def create_role(payload: RoleCreate, admin: AdminDep, roles: RoleServiceDep):
    data = await roles.create_role(payload, admin)
    return build_response(data, "Create a role", status.HTTP_201_CREATED)


@router.put(
    "",
    response_model=ResultResponse[RoleRead],
    summary="Update Role",
    description="Update a role selected by the id in the body; its permission list is replaced.",
    responses={400: {"description": "Role does not exist"}},
)
async def update_role(payload: RoleUpdate, admin: AdminDep, roles: RoleServiceDep):
    return build_response(await roles.update_role(payload, admin), "Update a role")


@router.delete(
    "/{role_id}",
    response_model=ResultResponse[None],
    summary="Delete Role",
    description="Delete a role. Users holding it are left without a role.",
    responses={400: {"description": "Role does not exist"}},
)
async def delete_role(role_id: int, _: AdminDep, roles: RoleServiceDep):
    await roles.delete_role(role_id)
    return build_response(None, "Delete a role")
