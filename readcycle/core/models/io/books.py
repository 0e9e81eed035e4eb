"""
Book I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from readcycle.core.database.entities.books import BookStatus

from .common import CamelModel, require_text


class BookWrite(CamelModel):
    """Fields shared by book creation and update requests."""

    category: Optional[str] = Field(default=None, validate_default=True)
    title: Optional[str] = Field(default=None, validate_default=True)
    author: Optional[str] = Field(default=None, validate_default=True)
    publisher: Optional[str] = Field(default=None, validate_default=True)
    thumb: Optional[str] = None
    description: Optional[str] = None
    quantity: int = Field(default=0)
    status: Optional[BookStatus] = None

    @field_validator("category", "title", "author", "publisher")
    @classmethod
    def _check_text(cls, value: Optional[str], info) -> str:
        return require_text(value, info.field_name.capitalize(), longer_than=2)

    @field_validator("quantity")
    @classmethod
    def _check_quantity(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Quantity must be greater than or equal to 0")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        if value is None or value == "":
            return None
        return BookStatus.parse(value)


class BookCreate(BookWrite):
    """Schema for creating a book."""


class BookUpdate(BookWrite):
    """Schema for updating a book; ``id`` selects the record."""

    id: int


class BookRead(CamelModel):
    """Schema for reading a book."""

    id: int
    category: str
    title: str
    author: str
    publisher: str
    thumb: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    status: BookStatus
    is_active: bool
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


class BulkCreateResult(CamelModel):
    """Outcome of a bulk import."""

    count_success: int = 0
    count_error: int = 0


class BookStats(CamelModel):
    """Stock statistics of one book."""

    category: str
    title: str
    total_qty: int
    current_qty: int
    borrow_qty: int
