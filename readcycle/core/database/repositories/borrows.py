"""
Borrow and cart repositories.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.books import Book
from ..entities.borrows import Borrow, BorrowStatus, Cart
from ..filters import PageRequest
from .base import SQLModelRepository


class BorrowRepository(SQLModelRepository[Borrow]):
    """Repository for borrow records using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Borrow)

    async def find_by_user_and_book_and_status(
        self, user_id: int, book_id: int, status: BorrowStatus
    ) -> Optional[Borrow]:
        stmt = select(Borrow).where(
            (Borrow.user_id == user_id) & (Borrow.book_id == book_id) & (Borrow.status == status)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_by_user_and_status(self, user_id: int, status: BorrowStatus) -> List[Borrow]:
        stmt = select(Borrow).where((Borrow.user_id == user_id) & (Borrow.status == status)).order_by(Borrow.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_borrowed_in_category(self, user_id: int, category: str) -> bool:
        """Whether the user currently holds a borrowed book of ``category``."""
        stmt = (
            select(Borrow.id)
            .join(Book, Book.id == Borrow.book_id)
            .where(
                (Borrow.user_id == user_id)
                & (Borrow.status == BorrowStatus.BORROWED)
                & (Book.category == category)
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_page_by_user(self, user_id: int, page: PageRequest) -> Tuple[List[Borrow], int]:
        """The user's borrow history, newest first unless the page asks otherwise."""
        stmt = select(Borrow).where(Borrow.user_id == user_id)
        return await self.paginate(stmt, page, default_order=Borrow.created_at.desc())

    async def delete_by_book(self, book_id: int) -> None:
        """Remove every borrow record of a book (not committed)."""
        await self.session.execute(sa_delete(Borrow).where(Borrow.book_id == book_id))


class CartRepository(SQLModelRepository[Cart]):
    """Repository for cart lines using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Cart)

    async def find_all_by_user(self, user_id: int) -> List[Cart]:
        stmt = select(Cart).where(Cart.user_id == user_id).order_by(Cart.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_ids_for_user(self, ids: Sequence[int], user_id: int) -> int:
        """Delete the given cart lines that belong to ``user_id``.

        Returns:
            Number of deleted rows
        """
        if not ids:
            return 0
        result = await self.session.execute(
            sa_delete(Cart).where(Cart.id.in_(list(ids)) & (Cart.user_id == user_id))
        )
        await self.session.commit()
        return result.rowcount or 0

    async def delete_by_book(self, book_id: int) -> None:
        """Remove every cart line pointing at a book (not committed)."""
        await self.session.execute(sa_delete(Cart).where(Cart.book_id == book_id))
