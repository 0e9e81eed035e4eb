"""
Maintenance gate middleware.

While maintenance is on, either persisted in the system configuration row or
set in-process through the readiness endpoint, requests outside the exempt
paths are answered with 503.
"""

from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from readcycle.core.database import async_session_maker
from readcycle.core.database.entities import SYSTEM_CONFIG_ID
from readcycle.core.database.repositories import SystemConfigRepository
from readcycle.core.logging_config import get_logger
from readcycle.server.core.constant import (
    MAINTENANCE_EXEMPT_PATHS,
    MAINTENANCE_EXEMPT_PREFIXES,
    MAINTENANCE_MESSAGE,
)

logger = get_logger(__name__)


def is_exempt(path: str) -> bool:
    """Whether ``path`` stays reachable during maintenance."""
    normalized = path.rstrip("/") or "/"
    if normalized in MAINTENANCE_EXEMPT_PATHS:
        return True
    return any(path.startswith(prefix) for prefix in MAINTENANCE_EXEMPT_PREFIXES)


async def persisted_maintenance_mode(session_factory) -> bool:
    """Read the maintenance switch from the system configuration row."""
    async with session_factory() as session:
        config = await SystemConfigRepository(session).get_by_id(SYSTEM_CONFIG_ID)
        return bool(config and config.maintenance_mode)


class MaintenanceMiddleware(BaseHTTPMiddleware):
    """Reject non exempt requests with 503 while maintenance is on."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS" or is_exempt(request.url.path):
            return await call_next(request)

        state = request.app.state
        in_maintenance = getattr(state, "maintenance_since", None) is not None
        if not in_maintenance:
            session_factory = getattr(state, "session_factory", async_session_maker)
            in_maintenance = await persisted_maintenance_mode(session_factory)

        if in_maintenance:
            logger.debug(f"Maintenance mode rejected {request.method} {request.url.path}")
            return JSONResponse(status_code=503, content={"statusCode": 503, "message": MAINTENANCE_MESSAGE})

        return await call_next(request)
