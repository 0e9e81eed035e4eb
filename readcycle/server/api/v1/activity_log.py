"""
Activity Log API Endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from readcycle.core.database.entities import ActivityGroup, ActivityType
from readcycle.core.models.io import ActivityLogRead, ResultPaginate, ResultResponse, build_response
from readcycle.server.services.deps import ActivityLogServiceDep, AdminDep, PageDep

router = APIRouter()


@router.get(
    "/activity-log",
    response_model=ResultResponse[ResultPaginate[ActivityLogRead]],
    summary="List Activity Logs",
    description="Audit entries, newest first, optionally narrowed by group and types.",
)
async def list_activity_logs(
    _: AdminDep,
    activity_log: ActivityLogServiceDep,
    page: PageDep,
    activity_group: Optional[ActivityGroup] = Query(default=None, alias="activityGroup"),
    activity_type: Optional[List[ActivityType]] = Query(default=None, alias="activityType"),
):
    """
    List audit entries.

    - **activityGroup**: ``Book`` or ``User``.
    - **activityType**: Repeat the parameter to match several types, e.g.
      ``activityType=Create book&activityType=Delete book``.
    """
    data = await activity_log.list_logs(page, activity_group, activity_type)
    return build_response(data, "Get all activity logs")
