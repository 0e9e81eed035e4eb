"""
Book entity models.

This module contains the catalogue entity. A book row carries its own stock
counter; borrowing decrements it and returning increments it.
"""

from enum import Enum
from typing import Any, Optional

from sqlalchemy import Column
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field

from ..base import AuditedBase


class BookStatus(str, Enum):
    """Availability of a book for borrowing."""

    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"

    @classmethod
    def parse(cls, value: Any) -> "BookStatus":
        """Lenient conversion; unknown values fall back to ``AVAILABLE``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.AVAILABLE


class BookBase(AuditedBase):
    """Base fields for a book."""

    category: str = Field(max_length=255, description="Catalogue category")
    title: str = Field(max_length=255, index=True, description="Book title")
    author: str = Field(max_length=255, description="Author name")
    publisher: str = Field(max_length=255, description="Publisher name")
    thumb: Optional[str] = Field(default=None, max_length=500, description="Stored thumbnail file name")
    description: Optional[str] = Field(default=None, description="Free text description")
    quantity: int = Field(default=0, ge=0, description="Copies currently on the shelf")
    is_active: bool = Field(default=True, description="Visible in the public catalogue")


class Book(BookBase, table=True):
    """Persistent book in the catalogue.

    Table: books
    """

    __tablename__ = "books"

    id: Optional[int] = Field(default=None, primary_key=True)
    status: BookStatus = Field(
        default=BookStatus.AVAILABLE,
        sa_column=Column(SAEnum(BookStatus, native_enum=False, length=16), nullable=False),
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title={self.title}, quantity={self.quantity}, status={self.status})"
