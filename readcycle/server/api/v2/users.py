"""
User Search API Endpoints.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from readcycle.core.models.io import ResultPaginate, ResultResponse, UserRead, build_response
from readcycle.server.services.deps import AdminDep, PageDep, UserServiceDep

router = APIRouter()


@router.get(
    "",
    response_model=ResultResponse[ResultPaginate[UserRead]],
    summary="Search Users",
    description="Users matching name and email substrings, an exact date of birth and a role name.",
)
async def search_users(
    _: AdminDep,
    users: UserServiceDep,
    page: PageDep,
    name: Optional[str] = Query(default=None),
    email: Optional[str] = Query(default=None),
    date_of_birth: Optional[date] = Query(default=None, alias="dateOfBirth"),
    role: Optional[str] = Query(default=None),
):
    data = await users.search_users(page, name, email, date_of_birth, role)
    return build_response(data, "Get all users")
