"""
Unit tests for the dashboard endpoints.
"""

import pytest
from httpx import AsyncClient

from readcycle.core.database.entities import BorrowStatus

pytestmark = pytest.mark.asyncio


class TestDashboard:
    """Test the admin console aggregates."""

    async def test_counts(self, client: AsyncClient, admin_headers, account_factory, book_factory):
        """Test the number of members, administrators and books."""
        await account_factory("Second Member", "second@readcycle.dev")
        await book_factory("Dune")
        await book_factory("Hidden", is_active=False)

        response = await client.get("/api/v1/admin/dashboard", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Count users & books"
        assert body["data"] == {"countUser": 1, "countAdmin": 1, "countBook": 2}

    async def test_book_statistics(self, client: AsyncClient, admin_headers, member_user, book_factory, borrow_factory):
        """Test that borrowed copies are added to the shelf quantity."""
        dune = await book_factory("Dune", quantity=2)
        emma = await book_factory("Emma", category="Romance", quantity=1)
        await borrow_factory(member_user, dune)
        await borrow_factory(member_user, dune, BorrowStatus.RETURNED)

        response = await client.get("/api/v1/admin/dashboard-books", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Stats books"
        assert response.json()["data"] == [
            {"category": "Novel", "title": "Dune", "totalQty": 3, "currentQty": 2, "borrowQty": 1},
            {"category": "Romance", "title": "Emma", "totalQty": 1, "currentQty": 1, "borrowQty": 0},
        ]
        assert emma.id > dune.id

    async def test_dashboard_requires_admin(self, client: AsyncClient, member_headers):
        """Test that members are refused."""
        response = await client.get("/api/v1/admin/dashboard", headers=member_headers)
        assert response.status_code == 403
