"""
Health Check Endpoints.

``/health`` and ``/version`` answer without touching any dependency.
``/actuator/health`` also pings the database and reports each component
the way deployment probes expect (``UP`` / ``DOWN``).
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from readcycle.core.logging_config import get_logger
from readcycle.server.core import constant
from readcycle.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", summary="Health Check", response_description="Liveness status.")
async def health_check():
    return {"status": "ok"}


@router.get("/version", summary="Get Version", response_description="Package and schema versions.")
async def version():
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}


@router.get(
    "/actuator/health",
    summary="Actuator Health",
    description="Readiness probe; answers 503 with status ``DOWN`` when the database cannot be reached.",
    responses={503: {"description": "A component is down"}},
)
async def actuator_health(session: SessionDep):
    try:
        await session.execute(text("SELECT 1"))
        database = "UP"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "DOWN"

    overall = "UP" if database == "UP" else "DOWN"
    return JSONResponse(
        status_code=status.HTTP_200_OK if overall == "UP" else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": overall, "components": {"db": {"status": database}}},
    )
