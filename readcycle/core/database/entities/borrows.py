"""
Borrow and cart entity models.

A cart line is a member's intention to borrow a book; a borrow records a
copy that left the shelf and its lifecycle (borrowed, returned, late, lost).
"""

from enum import Enum
from typing import Optional

from sqlalchemy import Column
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, Relationship

from ..base import AuditedBase
from .books import Book
from .users import User


class BorrowStatus(str, Enum):
    """Lifecycle of a borrowed copy."""

    BORROWED = "BORROWED"
    RETURNED = "RETURNED"
    LATE = "LATE"
    LOST = "LOST"


class Borrow(AuditedBase, table=True):
    """Persistent borrow record.

    Table: borrows
    """

    __tablename__ = "borrows"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    book_id: int = Field(foreign_key="books.id", index=True)
    status: BorrowStatus = Field(
        default=BorrowStatus.BORROWED,
        sa_column=Column(SAEnum(BorrowStatus, native_enum=False, length=16), nullable=False),
    )

    user: Optional[User] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    book: Optional[Book] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    def __repr__(self) -> str:
        return f"Borrow(id={self.id}, user_id={self.user_id}, book_id={self.book_id}, status={self.status})"


class Cart(AuditedBase, table=True):
    """Persistent cart line.

    Table: carts
    """

    __tablename__ = "carts"

    id: Optional[int] = Field(default=None, primary_key=True)
    sum: int = Field(default=1, ge=0, description="Number of copies requested")
    user_id: int = Field(foreign_key="users.id", index=True)
    book_id: int = Field(foreign_key="books.id", index=True)

    user: Optional[User] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    book: Optional[Book] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
