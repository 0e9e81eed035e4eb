"""
Exception handlers for the ReadCycle server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .api_handlers import error_body
from .global_handler import setup_exception_handlers

__all__ = ["error_body", "setup_exception_handlers"]
