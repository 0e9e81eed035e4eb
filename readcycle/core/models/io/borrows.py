"""
Cart and borrow I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from readcycle.core.database.entities.borrows import BorrowStatus

from .books import BookRead
from .common import CamelModel


class BookRef(CamelModel):
    """Reference to a book by id; any other book fields sent along are ignored."""

    id: int


class BorrowRequest(CamelModel):
    """Books taken from the cart in one checkout."""

    username: Optional[str] = None
    details: List[BookRef] = Field(default_factory=list)


class ReturnBookRequest(CamelModel):
    """Borrow record being returned."""

    id: int


class BorrowerRead(CamelModel):
    """Public view of the user owning a cart line or a borrow."""

    id: int
    name: str
    email: str


class CartRead(CamelModel):
    """A cart line with the requested book."""

    id: int
    quantity: int
    user: Optional[BorrowerRead] = None
    details: Optional[BookRead] = None


class BorrowRead(CamelModel):
    """A borrow record."""

    id: int
    status: BorrowStatus
    book: Optional[BookRead] = None
    user: Optional[BorrowerRead] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None
