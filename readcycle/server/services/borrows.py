"""
Cart and Borrow Service.

A member collects books in a cart, borrows them in one checkout and returns
them one at a time. Stock is kept on the book row: borrowing takes a copy
off the shelf, returning puts it back.
"""

from __future__ import annotations

from typing import List, Sequence

from readcycle.core.database.entities import Book, Borrow, BorrowStatus, Cart, User
from readcycle.core.database.filters import PageRequest
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.exceptions import InvalidError
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import (
    BookRead,
    BorrowerRead,
    BorrowRead,
    BorrowRequest,
    CartRead,
    ResultPaginate,
    build_page,
)
from readcycle.server.core.constant import ADMIN_ROLE

logger = get_logger(__name__)

RETURN_BEFORE_BORROW_MESSAGE = "Sorry, you have to return the book is borrowed before you borrow the other one."
RETURNABLE_STATUSES = (BorrowStatus.BORROWED, BorrowStatus.LATE)


def cart_to_read(cart: Cart) -> CartRead:
    return CartRead(
        id=cart.id,
        quantity=cart.sum,
        user=BorrowerRead.model_validate(cart.user) if cart.user else None,
        details=BookRead.model_validate(cart.book) if cart.book else None,
    )


def borrow_to_read(borrow: Borrow) -> BorrowRead:
    return BorrowRead(
        id=borrow.id,
        status=borrow.status,
        book=BookRead.model_validate(borrow.book) if borrow.book else None,
        user=BorrowerRead.model_validate(borrow.user) if borrow.user else None,
        created_at=borrow.created_at,
        created_by=borrow.created_by,
        updated_at=borrow.updated_at,
        updated_by=borrow.updated_by,
    )


class BorrowService:
    """Cart, checkout, return and history."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def _active_book(self, book_id: int) -> Book:
        book = await self.repos.books.get_active_by_id(book_id)
        if book is None:
            raise InvalidError(f"Book with id: {book_id} does not exists")
        return book

    # -----------------------------------------------------------------
    # Cart
    # -----------------------------------------------------------------

    async def add_to_cart(self, book_id: int, user: User) -> CartRead:
        """Put a book in the user's cart.

        Raises:
            InvalidError: The user still holds this book, or another book of
                the same category
        """
        book = await self._active_book(book_id)
        holding = await self.repos.borrows.find_by_user_and_book_and_status(user.id, book.id, BorrowStatus.BORROWED)
        if holding is not None or await self.repos.borrows.has_borrowed_in_category(user.id, book.category):
            raise InvalidError(RETURN_BEFORE_BORROW_MESSAGE)

        cart = Cart(sum=1, user_id=user.id, book_id=book.id, created_by=user.email)
        cart = await self.repos.carts.create(cart)
        logger.debug(f"Book {book.id} added to the cart of {user.email}")
        return cart_to_read(cart)

    async def list_carts(self, user: User) -> List[CartRead]:
        return [cart_to_read(cart) for cart in await self.repos.carts.find_all_by_user(user.id)]

    async def delete_cart(self, cart_id: int, user: User) -> None:
        cart = await self.repos.carts.get_by_id(cart_id)
        if cart is None or cart.user_id != user.id:
            raise InvalidError(f"Cart with id: {cart_id} does not exist")
        await self.repos.carts.delete(cart_id)

    async def remove_carts(self, cart_ids: Sequence[int], user: User) -> int:
        removed = await self.repos.carts.delete_by_ids_for_user(cart_ids, user.id)
        logger.debug(f"Removed {removed} cart lines of {user.email}")
        return removed

    # -----------------------------------------------------------------
    # Borrowing
    # -----------------------------------------------------------------

    async def borrow(self, payload: BorrowRequest, user: User) -> List[BorrowRead]:
        """Borrow every requested book or none of them.

        Raises:
            InvalidError: A requested book does not exist or has no copy left
        """
        borrows: List[Borrow] = []
        try:
            for detail in payload.details:
                book = await self._active_book(detail.id)
                if not await self.repos.books.take_copy(book.id, user.email):
                    raise InvalidError("Sorry the book you borrow is unavailable")

                borrow = Borrow(user_id=user.id, book_id=book.id, status=BorrowStatus.BORROWED, created_by=user.email)
                borrows.append(await self.repos.borrows.stage(borrow))
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise

        for borrow in borrows:
            await self.repos.session.refresh(borrow)
        logger.info(f"{user.email} borrowed {len(borrows)} book(s)")
        return [borrow_to_read(borrow) for borrow in borrows]

    async def return_book(self, borrow_id: int, user: User) -> BorrowRead:
        borrow = await self.repos.borrows.get_by_id(borrow_id)
        if borrow is None or (borrow.user_id != user.id and user.role_name != ADMIN_ROLE):
            raise InvalidError(f"Borrow with id: {borrow_id} does not exist")
        if borrow.status not in RETURNABLE_STATUSES:
            raise InvalidError("This book has already been returned")

        try:
            await self.repos.books.put_back_copy(borrow.book_id, user.email)
            borrow.status = BorrowStatus.RETURNED
            borrow.updated_by = user.email
            await self.repos.borrows.stage(borrow)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise

        await self.repos.session.refresh(borrow)
        logger.info(f"Borrow {borrow.id} returned by {user.email}")
        return borrow_to_read(borrow)

    async def history(self, user: User, page: PageRequest) -> ResultPaginate:
        items, total = await self.repos.borrows.find_page_by_user(user.id, page)
        return build_page(items, total, page.page, page.size, converter=borrow_to_read)
