"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain.
Each module provides type-safe data access operations for its corresponding
SQLModel entity models.

Modules:
- base: BaseRepository interface and the shared SQLModelRepository
- books: Catalogue and stock statistics
- users: Accounts, token lookups and role counts
- roles: Roles and permissions
- borrows: Borrow records and cart lines
- activity_logs: Audit entries and the system configuration row
- bundle: RepositoryBundle for dependency injection
"""

from .activity_logs import ActivityLogRepository, SystemConfigRepository
from .base import BaseRepository, SQLModelRepository
from .books import BookRepository
from .borrows import BorrowRepository, CartRepository
from .bundle import RepositoryBundle, build_repositories
from .roles import PermissionRepository, RoleRepository
from .users import UserRepository

__all__ = [
    "ActivityLogRepository",
    "BaseRepository",
    "BookRepository",
    "BorrowRepository",
    "CartRepository",
    "PermissionRepository",
    "RepositoryBundle",
    "RoleRepository",
    "SQLModelRepository",
    "SystemConfigRepository",
    "UserRepository",
    "build_repositories",
]
