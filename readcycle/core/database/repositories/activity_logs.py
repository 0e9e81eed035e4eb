"""
Activity log and system configuration repositories.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.activity_logs import ActivityGroup, ActivityLog, ActivityType
from ..entities.system_config import SYSTEM_CONFIG_ID, SystemConfig
from ..filters import PageRequest
from .base import SQLModelRepository


class ActivityLogRepository(SQLModelRepository[ActivityLog]):
    """Repository for audit entries using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ActivityLog)

    async def find_by_criteria(
        self,
        page: PageRequest,
        activity_group: Optional[ActivityGroup] = None,
        activity_types: Optional[Sequence[ActivityType]] = None,
    ) -> Tuple[List[ActivityLog], int]:
        """Page through audit entries, newest first.

        Args:
            page: Requested page
            activity_group: Only entries of this group
            activity_types: Only entries whose type is one of these
        """
        stmt = select(ActivityLog)
        if activity_group is not None:
            stmt = stmt.where(ActivityLog.activity_group == activity_group)
        if activity_types:
            if len(activity_types) == 1:
                stmt = stmt.where(ActivityLog.activity_type == activity_types[0])
            else:
                stmt = stmt.where(ActivityLog.activity_type.in_(list(activity_types)))
        return await self.paginate(stmt, page, default_order=ActivityLog.execution_time.desc())


class SystemConfigRepository(SQLModelRepository[SystemConfig]):
    """Repository for the single system configuration row."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SystemConfig)

    async def get_or_create(self) -> SystemConfig:
        """Return the configuration row, creating it with defaults when missing."""
        config = await self.get_by_id(SYSTEM_CONFIG_ID)
        if config is None:
            config = await self.create(SystemConfig(id=SYSTEM_CONFIG_ID, maintenance_mode=False))
        return config
