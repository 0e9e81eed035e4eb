"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for monitoring and
tracing of the ReadCycle service, including:
- API endpoint tracing
- Database operation monitoring
- Audit events (book and user changes)
- Error tracking

Instrumentation is conditional on ``LOGFIRE_ENABLED`` and ``LOGFIRE_TOKEN``;
when Logfire is not configured the ``log_*`` helpers do nothing.
"""

import logging
import os
from typing import Any, Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "readcycle")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "readcycle-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_configured = False


def is_logfire_configured() -> bool:
    """Whether :func:`initialize_logfire` has configured Logfire in this process."""
    return _configured


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Sets up Logfire with automatic instrumentation for SQLAlchemy database
    operations and FastAPI endpoints.

    Args:
        app: FastAPI application instance for FastAPI instrumentation (optional).
    """
    global _configured

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
        _configured = True

        if LOGFIRE_TRACE_SQLALCHEMY:
            try:
                from readcycle.core.database import engine

                logfire.instrument_sqlalchemy(engine=engine.sync_engine)
                logger.info("Logfire: SQLAlchemy instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument SQLAlchemy: {e}")

        if LOGFIRE_TRACE_FASTAPI:
            if app is not None:
                try:
                    logfire.instrument_fastapi(app=app)
                    logger.info("Logfire: FastAPI instrumentation enabled")
                except Exception as e:
                    logger.warning(f"Failed to instrument FastAPI: {e}")
            else:
                logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

        logger.info(
            f"Logfire monitoring initialized: "
            f"project={LOGFIRE_PROJECT_NAME}, "
            f"environment={LOGFIRE_ENVIRONMENT}, "
            f"service={LOGFIRE_SERVICE_NAME}"
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _configured:
        return
    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_activity(activity_type: str, activity_group: str, username: str) -> None:
    """
    Log an audited change to a book or a user.

    Args:
        activity_type: The activity type label (e.g. "Create book")
        activity_group: The activity group label ("Book" or "User")
        username: Email of the acting user
    """
    if not _configured:
        return
    logfire.info(
        "Activity recorded",
        activity_type=activity_type,
        activity_group=activity_group,
        username=username,
    )


def log_error(error_type: str, error_message: str, context: Optional[dict[str, Any]] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _configured:
        return
    logfire.error(
        "{error_type}: {error_message}",
        error_type=error_type,
        error_message=error_message,
        **(context or {}),
    )
