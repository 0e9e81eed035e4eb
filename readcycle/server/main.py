"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(maintenance gate, request logging, CORS), registers the exception handlers,
mounts the uploaded files and includes all API routers.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from readcycle.core.database import init_db
from readcycle.core.logging_config import get_logger, setup_logging
from readcycle.core.monitoring import initialize_logfire

from .api.v1 import (
    activity_log,
    admin_books,
    auth,
    books,
    borrows,
    dashboard,
    files,
    health,
    maintenance,
    permissions,
    roles,
    users,
)
from .api.v2 import books as books_v2
from .api.v2 import users as users_v2
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import MaintenanceMiddleware, RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables on startup when automatic creation is enabled.
    """
    # Startup
    try:
        logger.info("Starting up ReadCycle Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down ReadCycle Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    ReadCycle Server API

    Backend of a small library lending platform: members browse the catalogue,
    collect books in a cart and borrow or return them; administrators manage
    books, users, roles, permissions and the maintenance mode.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Process readiness; set through PUT /api/maintenance
app.state.maintenance_since = None

# The last middleware added runs first
app.add_middleware(MaintenanceMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(users.router, prefix=constant.API_V1_STR, tags=["users"])
app.include_router(books.router, prefix=f"{constant.API_V1_STR}/books", tags=["books"])
app.include_router(admin_books.router, prefix=f"{constant.API_V1_STR}/admin/books", tags=["admin"])
app.include_router(borrows.router, prefix=constant.API_V1_STR, tags=["borrows"])
app.include_router(roles.router, prefix=f"{constant.API_V1_STR}/roles", tags=["roles"])
app.include_router(permissions.router, prefix=f"{constant.API_V1_STR}/permissions", tags=["permissions"])
app.include_router(dashboard.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
app.include_router(activity_log.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
app.include_router(files.router, prefix=f"{constant.API_V1_STR}/file", tags=["files"])
app.include_router(maintenance.admin_router, prefix=constant.ADMIN_API_STR, tags=["maintenance"])
app.include_router(maintenance.readiness_router, prefix="/api/maintenance", tags=["maintenance"])
app.include_router(books_v2.router, prefix=f"{constant.API_V2_STR}/books", tags=["books"])
app.include_router(users_v2.router, prefix=f"{constant.API_V2_STR}/users", tags=["users"])

Path(settings.upload.base_dir).mkdir(parents=True, exist_ok=True)
app.mount(constant.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload.base_dir), name="upload")

initialize_logfire(app)
