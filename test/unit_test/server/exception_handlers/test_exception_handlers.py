"""
Unit tests for server exception handlers.

Tests cover the error envelope produced for service errors, request
validation failures, HTTP exceptions and unhandled exceptions.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from readcycle.core.exceptions import (
    ApiError,
    InvalidError,
    MaintenanceError,
    PermissionDeniedError,
    StorageError,
)
from readcycle.server.exception_handlers import error_body, setup_exception_handlers
from readcycle.server.exception_handlers.api_handlers import (
    api_error_handler,
    http_exception_handler,
    validation_error_handler,
)
from readcycle.server.exception_handlers.global_handler import (
    global_exception_handler,
)


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/books"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


def _body(response: JSONResponse) -> dict:
    return json.loads(response.body.decode())


class TestErrorBody:
    """Test the error envelope builder."""

    def test_shape(self):
        assert error_body(400, "Invalid", "Invalid") == {
            "statusCode": 400,
            "error": "Invalid",
            "message": "Invalid",
            "data": None,
        }


@pytest.mark.asyncio
class TestApiErrorHandler:
    """Test rendering of ApiError subclasses."""

    @pytest.mark.parametrize(
        "exc, status_code",
        [
            (InvalidError("Book with id: 9 does not exist"), 400),
            (PermissionDeniedError("Access denied"), 403),
            (MaintenanceError("Maintenance mode, we will be back soon"), 503),
            (ApiError("Teapot", status_code=418), 418),
        ],
    )
    async def test_status_and_message(self, mock_request, exc, status_code):
        """Test that the status and message of the error are rendered."""
        response = await api_error_handler(mock_request, exc)

        assert response.status_code == status_code
        body = _body(response)
        assert body["statusCode"] == status_code
        assert body["message"] == exc.message
        assert body["error"] == exc.message
        assert body["data"] is None

    async def test_storage_error_label(self, mock_request):
        """Test that storage errors carry their fixed error label."""
        response = await api_error_handler(mock_request, StorageError("File is empty. Please upload a file."))

        body = _body(response)
        assert body["error"] == "Exception upload file..."
        assert body["message"] == "File is empty. Please upload a file."

    async def test_reports_to_monitoring(self, mock_request):
        """Test that rejected requests are reported through log_error."""
        with patch("readcycle.server.exception_handlers.api_handlers.log_error") as mock_log_error:
            await api_error_handler(mock_request, InvalidError("Invalid"))

        mock_log_error.assert_called_once_with("InvalidError", "Invalid", {"path": "/api/v1/books"})


@pytest.mark.asyncio
class TestValidationErrorHandler:
    """Test rendering of request validation failures."""

    async def test_messages_without_value_error_prefix(self, mock_request):
        """Test that every message is listed with the pydantic prefix stripped."""
        exc = RequestValidationError(
            [
                {"type": "value_error", "loc": ("body", "email"), "msg": "Value error, Email is required"},
                {"type": "missing", "loc": ("body", "password"), "msg": "Field required"},
            ]
        )

        response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 400
        body = _body(response)
        assert body["error"] == "Invalid request"
        assert body["message"] == ["Email is required", "Field required"]


@pytest.mark.asyncio
class TestHttpExceptionHandler:
    """Test rendering of HTTP exceptions."""

    async def test_unauthorized_uses_bad_credentials(self, mock_request):
        exc = StarletteHTTPException(status_code=401, detail="Full authentication is required")

        response = await http_exception_handler(mock_request, exc)

        assert response.status_code == 401
        body = _body(response)
        assert body["message"] == "Bad credentials"
        assert body["error"] == "Full authentication is required"

    async def test_not_found(self, mock_request):
        response = await http_exception_handler(mock_request, StarletteHTTPException(status_code=404))

        assert response.status_code == 404
        assert _body(response)["message"] == "Not Found"

    async def test_keeps_headers(self, mock_request):
        exc = StarletteHTTPException(status_code=401, detail="Unauthorized", headers={"WWW-Authenticate": "Bearer"})

        response = await http_exception_handler(mock_request, exc)

        assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    async def test_exception_handler_logs_error(self, mock_request):
        """Test that exception handler logs errors."""
        exc = ValueError("Test error")

        with patch("readcycle.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"

    async def test_exception_handler_returns_500(self, mock_request):
        """Test that exception handler returns a 500 JSON response with an error id."""
        exc = RuntimeError("Test error")

        with patch("readcycle.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = _body(response)
        assert body["error_id"] == id(exc)
        assert body["error_type"] == "RuntimeError"

    async def test_exception_handler_without_client(self, mock_request):
        """Test that a request without client information is handled."""
        mock_request.client = None

        with patch("readcycle.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, KeyError("missing"))

        assert response.status_code == 500
        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"


class TestSetupExceptionHandlers:
    """Test handler registration."""

    def test_registers_all_handlers(self):
        app = FastAPI()

        setup_exception_handlers(app)

        assert app.exception_handlers[ApiError] is api_error_handler
        assert app.exception_handlers[RequestValidationError] is validation_error_handler
        assert app.exception_handlers[StarletteHTTPException] is http_exception_handler
        assert app.exception_handlers[Exception] is global_exception_handler
