"""
ReadCycle Server Package.

This package contains the web server implementation for the ReadCycle service.
It includes the API definition, exception handlers, middleware, services and
configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration settings and constants.
    exception_handlers: Error envelope handlers.
    middleware: Request logging and maintenance gate.
    services: Business logic and service layer.
"""
