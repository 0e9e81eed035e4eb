"""
Application error types.

Services raise these and never build HTTP responses themselves; the server's
exception handlers turn them into the error envelope.
"""

from typing import Optional


class ApiError(Exception):
    """Base error carrying a client facing message and an HTTP status."""

    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def error(self) -> str:
        """Short error label rendered in the ``error`` field of the envelope."""
        return self.message


class InvalidError(ApiError):
    """A business rule was violated or a referenced record does not exist."""

    status_code = 400


class StorageError(ApiError):
    """An uploaded file was rejected or could not be stored."""

    status_code = 400

    @property
    def error(self) -> str:
        return "Exception upload file..."


class AuthenticationError(ApiError):
    """The caller could not be authenticated."""

    status_code = 401


class PermissionDeniedError(ApiError):
    """The caller is authenticated but not allowed to perform the operation."""

    status_code = 403


class MaintenanceError(ApiError):
    """The service is in maintenance mode."""

    status_code = 503
