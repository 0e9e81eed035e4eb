"""
Maintenance Service.

Two switches put the service into maintenance: the persisted flag in the
system configuration row, flipped by administrators, and the in-process
readiness state kept on ``app.state`` for deployment tooling.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from readcycle.core.database.base import utc_now
from readcycle.core.database.entities import User
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import MaintenanceStatus, SystemConfigRead

logger = get_logger(__name__)


class MaintenanceService:
    """Persisted maintenance mode."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def get_config(self) -> SystemConfigRead:
        return SystemConfigRead.model_validate(await self.repos.system_config.get_or_create())

    async def set_maintenance_mode(self, enabled: bool, actor: User) -> SystemConfigRead:
        config = await self.repos.system_config.get_or_create()
        config.maintenance_mode = enabled
        config.updated_by = actor.email
        config = await self.repos.system_config.update(config)
        logger.warning(f"Maintenance mode {'enabled' if enabled else 'disabled'} by {actor.email}")
        return SystemConfigRead.model_validate(config)


def readiness_status(state: Any) -> MaintenanceStatus:
    since: Optional[datetime] = getattr(state, "maintenance_since", None)
    return MaintenanceStatus(is_in_maintenance=since is not None, from_=since)


def set_readiness(state: Any, in_maintenance: bool) -> MaintenanceStatus:
    """Switch the in-process readiness state, keeping the original start time."""
    if in_maintenance:
        if getattr(state, "maintenance_since", None) is None:
            state.maintenance_since = utc_now()
            logger.warning("Readiness maintenance state enabled")
    else:
        if getattr(state, "maintenance_since", None) is not None:
            logger.warning("Readiness maintenance state disabled")
        state.maintenance_since = None
    return readiness_status(state)
