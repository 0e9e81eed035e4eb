"""
Book repository.

Data access for the catalogue, including the criteria queries used by the
public v2 listing and the per-book stock statistics of the dashboard.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.books import Book, BookStatus
from ..entities.borrows import Borrow, BorrowStatus
from ..filters import PageRequest, QueryBuilder
from .base import SQLModelRepository


class BookRepository(SQLModelRepository[Book]):
    """Repository for book data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Book)

    async def get_active_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by ID only when it is visible in the public catalogue."""
        stmt = select(Book).where((Book.id == book_id) & (Book.is_active == True))  # noqa: E712
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def take_copy(self, book_id: int, updated_by: str) -> bool:
        """Take one copy of an active book off the shelf without committing.

        The stock check and the decrement run as one conditional UPDATE, so
        two checkouts of the last copy cannot both succeed.

        Returns:
            False when the book is inactive, missing or has no copy left
        """
        stmt = (
            update(Book)
            .where(Book.id == book_id, Book.is_active == True, Book.quantity > 0)  # noqa: E712
            .values(quantity=Book.quantity - 1, updated_by=updated_by, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        sold_out = (
            update(Book)
            .where(Book.id == book_id, Book.quantity == 0)
            .values(status=BookStatus.UNAVAILABLE)
        )
        await self.session.execute(sold_out)
        return True

    async def put_back_copy(self, book_id: int, updated_by: str) -> bool:
        """Return one copy of a book to the shelf without committing."""
        stmt = (
            update(Book)
            .where(Book.id == book_id)
            .values(
                quantity=Book.quantity + 1,
                status=BookStatus.AVAILABLE,
                updated_by=updated_by,
                updated_at=utc_now(),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def exists_by_title(self, title: str) -> bool:
        stmt = select(Book.id).where(Book.title == title).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_page(
        self,
        page: PageRequest,
        expression: Optional[str] = None,
        filters: Optional[dict] = None,
        active_only: bool = False,
    ) -> Tuple[List[Book], int]:
        """Page through books with a filter expression.

        Args:
            page: Requested page
            expression: Optional filter expression
            filters: Optional equality filters
            active_only: Restrict to books visible in the public catalogue
        """
        stmt = select(Book)
        if active_only:
            stmt = stmt.where(Book.is_active == True)  # noqa: E712
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Book, filters)
        stmt = QueryBuilder.apply_expression(stmt, Book, expression)
        return await self.paginate(stmt, page)

    async def find_by_criteria(
        self,
        page: PageRequest,
        category: Optional[str] = None,
        title: Optional[str] = None,
        author: Optional[str] = None,
        is_active: Optional[bool] = True,
    ) -> Tuple[List[Book], int]:
        """Page through books matching case-insensitive "contains" criteria."""
        stmt = select(Book)
        if category:
            stmt = stmt.where(Book.category.ilike(f"%{category}%"))
        if title:
            stmt = stmt.where(Book.title.ilike(f"%{title}%"))
        if author:
            stmt = stmt.where(Book.author.ilike(f"%{author}%"))
        if is_active is not None:
            stmt = stmt.where(Book.is_active == is_active)
        return await self.paginate(stmt, page)

    async def stock_statistics(self) -> List[Tuple[Book, int]]:
        """Every book paired with its number of copies currently borrowed."""
        borrowed = (
            select(Borrow.book_id, func.count(Borrow.id).label("borrow_qty"))
            .where(Borrow.status == BorrowStatus.BORROWED)
            .group_by(Borrow.book_id)
            .subquery()
        )
        stmt = (
            select(Book, func.coalesce(borrowed.c.borrow_qty, 0))
            .outerjoin(borrowed, borrowed.c.book_id == Book.id)
            .order_by(Book.id)
        )
        result = await self.session.execute(stmt)
        return [(book, int(borrow_qty)) for book, borrow_qty in result.all()]
