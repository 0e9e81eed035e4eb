"""
Repository bundle.

Groups every repository bound to one session so services receive a single
dependency.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .activity_logs import ActivityLogRepository, SystemConfigRepository
from .books import BookRepository
from .borrows import BorrowRepository, CartRepository
from .roles import PermissionRepository, RoleRepository
from .users import UserRepository


@dataclass(frozen=True)
class RepositoryBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    session: AsyncSession
    books: BookRepository
    users: UserRepository
    roles: RoleRepository
    permissions: PermissionRepository
    borrows: BorrowRepository
    carts: CartRepository
    activity_logs: ActivityLogRepository
    system_config: SystemConfigRepository


def build_repositories(session: AsyncSession) -> RepositoryBundle:
    """Build a ``RepositoryBundle`` around one session.

    Args:
        session: Async session shared by every repository

    Returns:
        RepositoryBundle with all repositories
    """
    return RepositoryBundle(
        session=session,
        books=BookRepository(session),
        users=UserRepository(session),
        roles=RoleRepository(session),
        permissions=PermissionRepository(session),
        borrows=BorrowRepository(session),
        carts=CartRepository(session),
        activity_logs=ActivityLogRepository(session),
        system_config=SystemConfigRepository(session),
    )
