"""
Database entity models.

This package contains all database entity models organized by business domain.
Each module represents either a single table or a small group of tables that
belong together.

Modules:
- books: Catalogue entries and their stock
- roles: Roles, permissions and their association table
- users: User accounts
- borrows: Borrow records and cart lines
- activity_logs: Audit trail of administrative changes
- system_config: Runtime switches (maintenance mode)
"""

from .activity_logs import ActivityGroup, ActivityLog, ActivityType
from .books import Book, BookStatus
from .borrows import Borrow, BorrowStatus, Cart
from .roles import Permission, Role, RolePermissionLink
from .system_config import SYSTEM_CONFIG_ID, SystemConfig
from .users import User

__all__ = [
    "ActivityGroup",
    "ActivityLog",
    "ActivityType",
    "Book",
    "BookStatus",
    "Borrow",
    "BorrowStatus",
    "Cart",
    "Permission",
    "Role",
    "RolePermissionLink",
    "SYSTEM_CONFIG_ID",
    "SystemConfig",
    "User",
]
