"""
Middleware modules for the ReadCycle server.

This package contains custom middleware for request logging and the
maintenance gate.
"""

from .maintenance import MaintenanceMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = ["MaintenanceMiddleware", "RequestLoggingMiddleware"]
