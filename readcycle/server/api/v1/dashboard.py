"""
Dashboard API Endpoints.
"""

from typing import List

from fastapi import APIRouter

from readcycle.core.models.io import BookStats, DashboardCounts, ResultResponse, build_response
from readcycle.server.services.deps import AdminDep, DashboardServiceDep

router = APIRouter()


@router.get(
    "/dashboard",
    response_model=ResultResponse[DashboardCounts],
    summary="Dashboard Counts",
    description="Number of members, administrators and books.",
)
async def dashboard(_: AdminDep, dashboard: DashboardServiceDep):
    return build_response(await dashboard.counts(), "Count users & books")


@router.get(
    "/dashboard-books",
    response_model=ResultResponse[List[BookStats]],
    summary="Book Statistics",
    description="Per book stock: copies on the shelf, copies borrowed and their total.",
)
async def dashboard_books(_: AdminDep, dashboard: DashboardServiceDep):
    return build_response(await dashboard.book_statistics(), "Stats books")
