"""
Unit tests for the public book API endpoints.

Tests cover book detail, the active catalogue listing with filter
expressions and sorting, and the administrative bulk import.
"""

import pytest
from httpx import AsyncClient
from sqlmodel import select

from readcycle.core.database.entities import Book

pytestmark = pytest.mark.asyncio


class TestGetBook:
    """Test the book detail endpoint."""

    async def test_get_book(self, client: AsyncClient, book_factory):
        """Test reading an active book without authentication."""
        book = await book_factory()
        response = await client.get(f"/api/v1/books/{book.id}")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Get book by id"
        assert body["data"]["title"] == "Dune"
        assert body["data"]["status"] == "AVAILABLE"
        assert body["data"]["isActive"] is True

    async def test_get_inactive_book(self, client: AsyncClient, book_factory):
        """Test that hidden books are not served."""
        book = await book_factory(is_active=False)
        response = await client.get(f"/api/v1/books/{book.id}")
        assert response.status_code == 400
        assert response.json()["message"] == f"Book with id: {book.id} does not exists"

    async def test_get_unknown_book(self, client: AsyncClient):
        """Test reading a book that does not exist."""
        response = await client.get("/api/v1/books/404")
        assert response.status_code == 400
        assert response.json()["statusCode"] == 400


class TestListBooks:
    """Test the catalogue listing."""

    async def test_list_active_books_only(self, client: AsyncClient, book_factory):
        """Test that hidden books are left out."""
        await book_factory("Dune")
        await book_factory("Emma", category="Romance", author="Jane Austen")
        await book_factory("Hidden", is_active=False)

        response = await client.get("/api/v1/books")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Get all books"
        assert body["data"]["meta"]["total"] == 2
        assert [book["title"] for book in body["data"]["result"]] == ["Dune", "Emma"]

    async def test_list_books_with_filter(self, client: AsyncClient, book_factory):
        """Test filtering by category."""
        await book_factory("Dune")
        await book_factory("Emma", category="Romance")

        response = await client.get("/api/v1/books", params={"filter": "category : 'Romance'"})
        result = response.json()["data"]["result"]
        assert [book["title"] for book in result] == ["Emma"]

    async def test_list_books_with_comparison_filter(self, client: AsyncClient, book_factory):
        """Test numeric comparisons joined with 'and'."""
        await book_factory("Dune", quantity=5)
        await book_factory("Emma", quantity=1)
        await book_factory("Ulysses", quantity=0)

        response = await client.get("/api/v1/books", params={"filter": "quantity >: 1 and title ~ 'u'"})
        assert [book["title"] for book in response.json()["data"]["result"]] == ["Dune"]

    async def test_list_books_sorted(self, client: AsyncClient, book_factory):
        """Test descending sort by title."""
        await book_factory("Dune")
        await book_factory("Emma")
        await book_factory("Atlas")

        response = await client.get("/api/v1/books", params={"sort": "title,desc"})
        assert [book["title"] for book in response.json()["data"]["result"]] == ["Emma", "Dune", "Atlas"]

    async def test_list_books_invalid_filter(self, client: AsyncClient):
        """Test that a malformed filter gives a readable error."""
        response = await client.get("/api/v1/books", params={"filter": "title ~"})
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid filter")

    async def test_list_books_unknown_field(self, client: AsyncClient):
        """Test that filtering on an unknown field is rejected."""
        response = await client.get("/api/v1/books", params={"filter": "isbn : '123'"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid filter: unknown field 'isbn'"

    async def test_list_books_page_size_limit(self, client: AsyncClient):
        """Test that oversized pages are rejected."""
        response = await client.get("/api/v1/books", params={"size": 1000})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


class TestBulkCreate:
    """Test the bulk import."""

    def _book(self, title: str) -> dict:
        return {
            "category": "Novel",
            "title": title,
            "author": "Some Author",
            "publisher": "Some Publisher",
            "quantity": 2,
        }

    async def test_bulk_create(self, client: AsyncClient, session, admin_headers, book_factory):
        """Test that existing titles are counted as errors."""
        await book_factory("Dune")
        payload = [self._book("Dune"), self._book("Emma"), self._book("Ulysses")]

        response = await client.post("/api/v1/books/bulk-create", headers=admin_headers, json=payload)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Import books"
        assert body["data"] == {"countSuccess": 2, "countError": 1}

        titles = (await session.execute(select(Book.title).order_by(Book.title))).scalars().all()
        assert titles == ["Dune", "Emma", "Ulysses"]

    async def test_bulk_create_requires_admin(self, client: AsyncClient, member_headers):
        """Test that members cannot import books."""
        response = await client.post("/api/v1/books/bulk-create", headers=member_headers, json=[self._book("Emma")])
        assert response.status_code == 403

    async def test_bulk_create_validation(self, client: AsyncClient, admin_headers):
        """Test that every imported book is validated."""
        payload = [self._book("Emma"), {"title": "No"}]
        response = await client.post("/api/v1/books/bulk-create", headers=admin_headers, json=payload)
        assert response.status_code == 400
        assert "Title must be greater than 2" in response.json()["message"]
