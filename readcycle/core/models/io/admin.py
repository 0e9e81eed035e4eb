"""
I/O models of the administration surfaces: activity log, maintenance,
dashboard and file uploads.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from readcycle.core.database.entities.activity_logs import ActivityGroup, ActivityType

from .common import CamelModel


class ActivityDescription(CamelModel):
    """One changed attribute of an audited record."""

    key: str
    value: str
    label: Optional[str] = None


class ActivityLogRead(CamelModel):
    id: int
    activity_type: ActivityType
    activity_group: ActivityGroup
    execution_time: datetime
    description: List[ActivityDescription] = Field(default_factory=list)
    username: Optional[str] = None


class SystemConfigRead(CamelModel):
    id: int
    maintenance_mode: bool
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class ToggleMaintenanceRequest(CamelModel):
    maintenance_mode: bool


class MaintenanceStatus(CamelModel):
    """In-process readiness state."""

    is_in_maintenance: bool = False
    from_: Optional[datetime] = Field(default=None, alias="from")


class DashboardCounts(CamelModel):
    count_user: int
    count_admin: int
    count_book: int


class UploadFileResponse(CamelModel):
    file_name: str
    uploaded_at: datetime
