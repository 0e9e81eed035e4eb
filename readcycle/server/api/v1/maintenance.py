"""
Maintenance API Endpoints.

``admin_router`` (mounted under ``/api/admin``) flips the persisted
maintenance mode. ``readiness_router`` (mounted under ``/api/maintenance``)
reads and sets the in-process readiness state. Both require the admin role.
"""

from fastapi import APIRouter, Body, Request, Response, status

from readcycle.core.models.io import (
    MaintenanceStatus,
    ResultResponse,
    SystemConfigRead,
    ToggleMaintenanceRequest,
    build_response,
)
from readcycle.server.services.deps import AdminDep, MaintenanceServiceDep
from readcycle.server.services.maintenance import readiness_status, set_readiness

admin_router = APIRouter()
readiness_router = APIRouter()


@admin_router.get(
    "/maintenance",
    response_model=ResultResponse[SystemConfigRead],
    summary="Get Maintenance Mode",
    description="The persisted system configuration.",
)
async def get_maintenance(_: AdminDep, maintenance: MaintenanceServiceDep):
    return build_response(await maintenance.get_config(), "Get maintenance mode")


@admin_router.put(
    "/toggle-maintenance",
    response_model=ResultResponse[SystemConfigRead],
    summary="Toggle Maintenance Mode",
    description="Switch the persisted maintenance mode. Members are rejected with 503 while it is on.",
)
async def toggle_maintenance(payload: ToggleMaintenanceRequest, admin: AdminDep, maintenance: MaintenanceServiceDep):
    data = await maintenance.set_maintenance_mode(payload.maintenance_mode, admin)
    return build_response(data, "Toggle maintenance mode")


@readiness_router.get(
    "",
    response_model=ResultResponse[MaintenanceStatus],
    summary="Get Readiness State",
    description="Whether this process is in maintenance and since when.",
)
async def get_readiness(request: Request, _: AdminDep):
    return build_response(readiness_status(request.app.state), "Get maintenance status")


@readiness_router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set Readiness State",
    description="Body ``true`` puts this process into maintenance, ``false`` takes it out.",
)
async def put_readiness(request: Request, _: AdminDep, in_maintenance: bool = Body(...)):
    set_readiness(request.app.state, in_maintenance)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
