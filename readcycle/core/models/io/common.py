"""
Common I/O models shared by every endpoint.

Successful responses are wrapped in ``ResultResponse``; list endpoints carry a
``ResultPaginate`` inside it. JSON keys are camelCase on the wire while the
Python attributes stay snake_case.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from readcycle.server.core.constant import DEFAULT_API_MESSAGE

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model rendering camelCase keys and reading ORM attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ResultResponse(CamelModel, Generic[T]):
    """Success envelope."""

    status_code: int = Field(default=200, description="HTTP status of the response")
    error: Optional[str] = Field(default=None, description="Always null on success")
    message: Any = Field(default=DEFAULT_API_MESSAGE, description="Endpoint API message")
    data: Optional[T] = Field(default=None, description="Response payload")


class Meta(CamelModel):
    """Pagination metadata."""

    page: int = Field(description="1-based page number")
    page_size: int = Field(description="Requested page size")
    pages: int = Field(description="Total number of pages")
    total: int = Field(description="Total number of matching records")


class ResultPaginate(CamelModel, Generic[T]):
    """A page of results with its metadata."""

    meta: Meta
    result: List[T] = Field(default_factory=list)


def require_text(value: Optional[str], label: str, longer_than: int = 0, longer_message: Optional[str] = None) -> str:
    """Validate a mandatory text field.

    Raises:
        ValueError: "<label> is required" when blank, ``longer_message`` when
            the value has ``longer_than`` characters or fewer
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{label} is required")
    if longer_than and len(value) <= longer_than:
        raise ValueError(longer_message or f"{label} must be greater than {longer_than}")
    return value


def build_response(data: Any = None, message: Optional[str] = None, status_code: int = 200) -> ResultResponse:
    """Wrap ``data`` in the success envelope."""
    return ResultResponse(
        status_code=status_code,
        message=message or DEFAULT_API_MESSAGE,
        data=data,
    )


def build_page(
    items: Iterable[Any],
    total: int,
    page: int,
    size: int,
    converter: Optional[Callable[[Any], Any]] = None,
) -> ResultPaginate:
    """Build a ``ResultPaginate`` from repository results.

    Args:
        items: Records on the requested page
        total: Total number of matching records
        page: 1-based page number
        size: Page size
        converter: Optional mapping applied to each record
    """
    pages = math.ceil(total / size) if size else 0
    result = [converter(item) for item in items] if converter else list(items)
    return ResultPaginate(meta=Meta(page=page, page_size=size, pages=pages, total=total), result=result)
