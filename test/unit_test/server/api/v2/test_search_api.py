"""
Unit tests for the v2 search endpoints.

The v2 listings take plain query parameters instead of a filter expression.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestSearchBooks:
    """Test the public book search."""

    async def test_search_by_criteria(self, client: AsyncClient, book_factory):
        """Test case-insensitive substring matching on several fields."""
        await book_factory("Dune", author="Frank Herbert")
        await book_factory("Children of Dune", author="Frank Herbert")
        await book_factory("Emma", category="Romance", author="Jane Austen")
        await book_factory("Dune Hidden", is_active=False)

        response = await client.get("/api/v2/books", params={"title": "dune", "author": "HERBERT"})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Get all books"
        assert [book["title"] for book in body["data"]["result"]] == ["Dune", "Children of Dune"]

        response = await client.get("/api/v2/books", params={"category": "rom"})
        assert [book["title"] for book in response.json()["data"]["result"]] == ["Emma"]

    async def test_search_paginates(self, client: AsyncClient, book_factory):
        """Test the pagination metadata."""
        for title in ("Atlas", "Beloved", "Candide"):
            await book_factory(title)

        response = await client.get("/api/v2/books", params={"page": 2, "size": 2, "sort": "title"})
        data = response.json()["data"]
        assert data["meta"] == {"page": 2, "pageSize": 2, "pages": 2, "total": 3}
        assert [book["title"] for book in data["result"]] == ["Candide"]


class TestSearchUsers:
    """Test the administrative user search."""

    async def test_search_users(self, client: AsyncClient, admin_headers, member_user, account_factory):
        """Test matching on name, email and role."""
        await account_factory("Another Member", "another@example.org")

        response = await client.get("/api/v2/users", headers=admin_headers, params={"name": "member"})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Get all users"
        assert [user["email"] for user in body["data"]["result"]] == ["member@readcycle.dev", "another@example.org"]

        response = await client.get(
            "/api/v2/users", headers=admin_headers, params={"email": "readcycle", "role": "user"}
        )
        assert [user["email"] for user in response.json()["data"]["result"]] == ["member@readcycle.dev"]

    async def test_search_users_by_date_of_birth(self, client: AsyncClient, admin_headers, member_user):
        """Test the exact date of birth match."""
        response = await client.get("/api/v2/users", headers=admin_headers, params={"dateOfBirth": "1990-01-15"})
        assert response.json()["data"]["meta"]["total"] == 2

        response = await client.get("/api/v2/users", headers=admin_headers, params={"dateOfBirth": "2000-01-01"})
        assert response.json()["data"]["meta"]["total"] == 0

    async def test_search_users_requires_admin(self, client: AsyncClient, member_headers):
        """Test that members are refused."""
        response = await client.get("/api/v2/users", headers=member_headers)
        assert response.status_code == 403
