"""
Dashboard Service.

Aggregates shown on the admin console landing page.
"""

from __future__ import annotations

from typing import List

from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.models.io import BookStats, DashboardCounts
from readcycle.server.core.constant import ADMIN_ROLE, USER_ROLE


class DashboardService:
    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def counts(self) -> DashboardCounts:
        return DashboardCounts(
            count_user=await self.repos.users.count_by_role_name(USER_ROLE),
            count_admin=await self.repos.users.count_by_role_name(ADMIN_ROLE),
            count_book=await self.repos.books.count(),
        )

    async def book_statistics(self) -> List[BookStats]:
        """Per book stock: copies on the shelf plus copies currently borrowed."""
        return [
            BookStats(
                category=book.category,
                title=book.title,
                total_qty=book.quantity + borrow_qty,
                current_qty=book.quantity,
                borrow_qty=borrow_qty,
            )
            for book, borrow_qty in await self.repos.books.stock_statistics()
        ]
