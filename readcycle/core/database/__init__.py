"""
Centralized database layer for ReadCycle.

Structure:
- entities/: Database entity models organized by table/business logic
- repositories/: Data access layer organized by table/business logic
- filters.py: Query building (equality filters, filter expressions, paging)
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session, seed rows)
"""

from .base import AuditedBase, Base, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    seed_defaults,
)

__all__ = [
    "AuditedBase",
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "seed_defaults",
    "utc_now",
]
