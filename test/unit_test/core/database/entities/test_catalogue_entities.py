"""Unit tests for the book, borrow and cart entity models."""

from __future__ import annotations

import pytest

from readcycle.core.database.entities import Book, BookStatus, Borrow, BorrowStatus, Cart


class TestBookStatus:
    """Tests for BookStatus parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("AVAILABLE", BookStatus.AVAILABLE),
            ("unavailable", BookStatus.UNAVAILABLE),
            (BookStatus.UNAVAILABLE, BookStatus.UNAVAILABLE),
            ("shelved", BookStatus.AVAILABLE),
            (42, BookStatus.AVAILABLE),
        ],
    )
    def test_parse(self, value, expected):
        assert BookStatus.parse(value) is expected


class TestBook:
    """Tests for the Book entity."""

    def test_defaults(self, sample_book_data):
        data = dict(sample_book_data)
        data.pop("status")
        data.pop("quantity")
        data.pop("is_active")
        book = Book(**data)

        assert book.id is None
        assert book.quantity == 0
        assert book.status == BookStatus.AVAILABLE
        assert book.is_active is True
        assert book.thumb is None

    def test_repr(self, sample_book_data):
        book = Book(id=7, **sample_book_data)
        assert repr(book).startswith("Book(id=7, title=Dune, quantity=3, status=")

    @pytest.mark.asyncio
    async def test_persisted_audit_columns(self, stored_book):
        """Test that the creation time is filled in on insert."""
        assert stored_book.id is not None
        assert stored_book.created_at is not None
        assert stored_book.updated_at is None


class TestBorrowAndCart:
    """Tests for the Borrow and Cart entities."""

    def test_borrow_status_values(self):
        assert [status.value for status in BorrowStatus] == ["BORROWED", "RETURNED", "LATE", "LOST"]

    @pytest.mark.asyncio
    async def test_relationships_load(self, in_memory_session, stored_book, stored_user):
        """Test that a borrow and a cart line expose their user and book."""
        borrow = Borrow(user_id=stored_user.id, book_id=stored_book.id, status=BorrowStatus.BORROWED)
        cart = Cart(user_id=stored_user.id, book_id=stored_book.id)
        in_memory_session.add_all([borrow, cart])
        await in_memory_session.commit()
        await in_memory_session.refresh(borrow)
        await in_memory_session.refresh(cart)

        assert borrow.book.title == "Dune"
        assert borrow.user.email == "member@readcycle.dev"
        assert cart.sum == 1
        assert cart.book.id == stored_book.id
