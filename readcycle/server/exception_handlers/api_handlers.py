"""
Handlers turning expected errors into the error envelope.

Every body produced here has the shape
``{"statusCode", "error", "message", "data": null}``.
"""

from typing import Any, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from readcycle.core.exceptions import ApiError
from readcycle.core.logging_config import get_logger
from readcycle.core.monitoring import log_error

logger = get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def error_body(status_code: int, error: Any, message: Any) -> dict:
    return {"statusCode": status_code, "error": error, "message": message, "data": None}


def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        msg = str(err.get("msg", ""))
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX) :]
        messages.append(msg)
    return messages


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ``ApiError`` raised by a service."""
    logger.info(f"{request.method} {request.url.path} rejected with {exc.status_code}: {exc.message}")
    log_error(type(exc).__name__, exc.message, {"path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.error, exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as a list of field messages."""
    messages = _validation_messages(exc)
    logger.debug(f"Invalid request on {request.method} {request.url.path}: {messages}")
    return JSONResponse(status_code=400, content=error_body(400, "Invalid request", messages))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render ``HTTPException`` (authentication failures, unknown routes)."""
    if exc.status_code == 401:
        body = error_body(401, exc.detail, "Bad credentials")
    else:
        body = error_body(exc.status_code, exc.detail, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))
