"""Server-wide constants."""

from readcycle import __version__

PROJECT_NAME = "ReadCycle"
VERSION = __version__
SCHEMA_VERSION = "v1"

API_V1_STR = "/api/v1"
API_V2_STR = "/api/v2"
ADMIN_API_STR = "/api/admin"
UPLOAD_URL_PREFIX = "/upload"

REFRESH_TOKEN_COOKIE = "refresh_token"

ADMIN_ROLE = "admin"
USER_ROLE = "user"

SYSTEM_USER = "system"

DEFAULT_API_MESSAGE = "Call API successfully!"
MAINTENANCE_MESSAGE = "Maintenance mode, we will be back soon"

# Paths that stay reachable while maintenance mode is on
MAINTENANCE_EXEMPT_PATHS = (
    "/health",
    "/version",
    f"{API_V1_STR}/auth/login",
    f"{API_V1_STR}/auth/logout",
    "/api/maintenance",
    f"{API_V1_STR}/openapi.json",
    f"{API_V1_STR}/docs",
    f"{API_V1_STR}/redoc",
)
MAINTENANCE_EXEMPT_PREFIXES = (
    "/actuator/",
    f"{ADMIN_API_STR}/",
    f"{API_V1_STR}/admin/",
)
