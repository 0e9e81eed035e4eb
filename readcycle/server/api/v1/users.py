"""
User API Endpoints.

Member self registration, password change and the administrative
management of accounts.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from readcycle.core.models.io import (
    ChangePasswordRequest,
    RegisterRequest,
    RegisterResponse,
    ResultPaginate,
    ResultResponse,
    UserCreate,
    UserRead,
    UserUpdate,
    build_response,
)
from readcycle.server.services.deps import AdminDep, CurrentUserDep, PageDep, UserServiceDep

router = APIRouter()


@router.post(
    "/user/register",
    response_model=ResultResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register Account",
    description="Create a member account waiting for email verification.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Invalid registration data or email already exists"},
    },
)
async def register(payload: RegisterRequest, users: UserServiceDep):
    """
    Register a member account.

    - **firstName** / **lastName**: Longer than one character.
    - **email**: Valid and not registered yet.
    - **dateOfBirth**: ``yyyy-MM-dd``, strictly in the past.
    - **password** / **confirmPassword**: At least three characters and identical.
    """
    data = await users.register(payload)
    return build_response(data, "Register account", status.HTTP_201_CREATED)


@router.get(
    "/users",
    response_model=ResultResponse[ResultPaginate[UserRead]],
    summary="List Users",
    description="Paginated list of accounts, optionally narrowed with a filter expression.",
)
async def list_users(
    _: AdminDep,
    users: UserServiceDep,
    page: PageDep,
    filter: Optional[str] = Query(default=None, description="Filter expression, e.g. name~'john'"),
):
    return build_response(await users.list_users(page, filter), "Get all users")


@router.post(
    "/users",
    response_model=ResultResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create an account with a generated password sent by mail.",
    responses={400: {"description": "Invalid data, unknown role or email already exists"}},
)
async def create_user(payload: UserCreate, admin: AdminDep, users: UserServiceDep):
    data = await users.create_user(payload, admin)
    return build_response(data, "Create a user", status.HTTP_201_CREATED)


@router.put(
    "/users/change-password",
    response_model=ResultResponse[None],
    summary="Change Password",
    description="Change the password of the signed-in user.",
    responses={400: {"description": "Current password incorrect or new password invalid"}},
)
async def change_password(payload: ChangePasswordRequest, user: CurrentUserDep, users: UserServiceDep):
    await users.change_password(payload, user)
    return build_response(None, "Change password")


@router.get(
    "/users/{user_id}",
    response_model=ResultResponse[UserRead],
    summary="Get User",
    description="Retrieve one account by id. Any signed-in user may read it.",
    responses={400: {"description": "User does not exist"}},
)
async def get_user(user_id: int, _: CurrentUserDep, users: UserServiceDep):
    return build_response(await users.get_user(user_id), "Get user by id")


@router.put(
    "/users",
    response_model=ResultResponse[UserRead],
    summary="Update User",
    description="Update name, date of birth and role of an account.",
    responses={400: {"description": "User or role does not exist"}},
)
async def update_user(payload: UserUpdate, admin: AdminDep, users: UserServiceDep):
    return build_response(await users.update_user(payload, admin), "Update user")


@router.put(
    "/users/{user_id}",
    response_model=ResultResponse[UserRead],
    summary="Toggle User Active",
    description="Enable or disable an account (soft delete).",
    responses={400: {"description": "User does not exist"}},
)
async def toggle_user(user_id: int, admin: AdminDep, users: UserServiceDep):
    return build_response(await users.toggle_active(user_id, admin), "Toggle soft delete user")


@router.delete(
    "/users/{user_id}",
    response_model=ResultResponse[None],
    summary="Delete User",
    description="Delete an account with its cart lines and borrow history.",
    responses={400: {"description": "User does not exist or is the signed-in administrator"}},
)
async def delete_user(user_id: int, admin: AdminDep, users: UserServiceDep):
    await users.delete_user(user_id, admin)
    return build_response(None, "Delete user")
