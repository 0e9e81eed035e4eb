"""
Book Service.

Catalogue queries for members and catalogue management for administrators.
"""

from __future__ import annotations

from typing import List, Optional

from readcycle.core.database.entities import ActivityGroup, ActivityType, Book, BookStatus, User
from readcycle.core.database.filters import PageRequest
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.exceptions import InvalidError
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import BookCreate, BookRead, BookUpdate, BulkCreateResult, ResultPaginate, build_page

from .activity_log import (
    ARROW,
    NONE_VALUE,
    ActivityLogService,
    describe,
    describe_book_creation,
    describe_book_update,
    snapshot_book,
)

logger = get_logger(__name__)


def resolve_status(quantity: int, requested: Optional[BookStatus], current: Optional[BookStatus] = None) -> BookStatus:
    """An empty shelf is always unavailable; otherwise keep the requested or current status."""
    if quantity == 0:
        return BookStatus.UNAVAILABLE
    return requested or current or BookStatus.AVAILABLE


class BookService:
    """Catalogue operations."""

    def __init__(self, repos: RepositoryBundle, activity_log: Optional[ActivityLogService] = None) -> None:
        self.repos = repos
        self.activity_log = activity_log or ActivityLogService(repos)

    async def get_book_entity(self, book_id: int, active_only: bool = False) -> Book:
        if active_only:
            book = await self.repos.books.get_active_by_id(book_id)
        else:
            book = await self.repos.books.get_by_id(book_id)
        if book is None:
            raise InvalidError(f"Book with id: {book_id} does not exists")
        return book

    async def get_book(self, book_id: int) -> BookRead:
        return BookRead.model_validate(await self.get_book_entity(book_id, active_only=True))

    async def list_books(
        self, page: PageRequest, expression: Optional[str] = None, active_only: bool = True
    ) -> ResultPaginate:
        items, total = await self.repos.books.find_page(page, expression, active_only=active_only)
        return build_page(items, total, page.page, page.size, converter=BookRead.model_validate)

    async def search_books(
        self,
        page: PageRequest,
        category: Optional[str] = None,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> ResultPaginate:
        items, total = await self.repos.books.find_by_criteria(page, category, title, author, is_active=True)
        return build_page(items, total, page.page, page.size, converter=BookRead.model_validate)

    def _new_book(self, payload: BookCreate, actor: User) -> Book:
        return Book(
            category=payload.category,
            title=payload.title,
            author=payload.author,
            publisher=payload.publisher,
            thumb=payload.thumb,
            description=payload.description,
            quantity=payload.quantity,
            status=resolve_status(payload.quantity, payload.status),
            is_active=True,
            created_by=actor.email,
        )

    async def create_book(self, payload: BookCreate, actor: User) -> BookRead:
        book = await self.repos.books.create(self._new_book(payload, actor))
        logger.info(f"Book {book.id} created by {actor.email}")
        result = BookRead.model_validate(book)
        await self.activity_log.record(
            ActivityGroup.BOOK, ActivityType.CREATE_BOOK, describe_book_creation(book), actor.email
        )
        return result

    async def bulk_create(self, payloads: List[BookCreate], actor: User) -> BulkCreateResult:
        """Import books; titles already in the catalogue are counted as errors."""
        result = BulkCreateResult()
        try:
            for payload in payloads:
                if await self.repos.books.exists_by_title(payload.title):
                    result.count_error += 1
                    continue
                await self.repos.books.stage(self._new_book(payload, actor))
                result.count_success += 1
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        logger.info(f"Bulk import by {actor.email}: {result.count_success} created, {result.count_error} skipped")
        return result

    async def update_book(self, payload: BookUpdate, actor: User) -> BookRead:
        book = await self.get_book_entity(payload.id)
        old = snapshot_book(book)

        book.category = payload.category
        book.title = payload.title
        book.author = payload.author
        book.publisher = payload.publisher
        book.thumb = payload.thumb
        book.description = payload.description
        book.quantity = payload.quantity
        book.status = resolve_status(payload.quantity, payload.status, book.status)
        book.updated_by = actor.email
        book = await self.repos.books.update(book)

        descriptions = describe_book_update(old, book)
        result = BookRead.model_validate(book)
        if len(descriptions) > 1:
            await self.activity_log.record(ActivityGroup.BOOK, ActivityType.UPDATE_BOOK, descriptions, actor.email)
        return result

    async def toggle_active(self, book_id: int, actor: User) -> BookRead:
        book = await self.get_book_entity(book_id)
        was_active = book.is_active
        book.is_active = not was_active
        book.updated_by = actor.email
        book = await self.repos.books.update(book)
        result = BookRead.model_validate(book)
        await self.activity_log.record(
            ActivityGroup.BOOK,
            ActivityType.SOFT_DELETE_BOOK,
            [
                describe("bookId", book.id, "Book id"),
                describe("isActive", f"{was_active}{ARROW}{book.is_active}", "Active"),
            ],
            actor.email,
        )
        return result

    async def delete_book(self, book_id: int, actor: User) -> None:
        """Delete a book together with the cart lines and borrows referencing it."""
        book = await self.get_book_entity(book_id)
        try:
            await self.repos.carts.delete_by_book(book_id)
            await self.repos.borrows.delete_by_book(book_id)
            await self.repos.session.delete(book)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        logger.info(f"Book {book_id} deleted by {actor.email}")
        await self.activity_log.record(
            ActivityGroup.BOOK,
            ActivityType.DELETE_BOOK,
            [describe("bookId", f"{book_id}{ARROW}{NONE_VALUE}", "Book id")],
            actor.email,
        )
