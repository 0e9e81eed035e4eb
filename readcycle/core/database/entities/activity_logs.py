"""
Activity log entity models.

Audit trail of administrative changes to books and users. The description is
a JSON array of ``{"key", "value", "label"}`` items stored as text.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field

from ..base import Base, utc_now


class ActivityGroup(str, Enum):
    """Kind of record an activity refers to."""

    BOOK = "Book"
    USER = "User"


class ActivityType(str, Enum):
    """Audited operations."""

    CREATE_USER = "Create user"
    UPDATE_USER = "Update user"
    DELETE_USER = "Delete user"
    CREATE_BOOK = "Create book"
    UPDATE_BOOK = "Update book"
    DELETE_BOOK = "Delete book"
    SOFT_DELETE_BOOK = "Toggle soft delete book"


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


class ActivityLog(Base, table=True):
    """Persistent audit entry.

    Table: activity_logs
    """

    __tablename__ = "activity_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    activity_type: ActivityType = Field(
        sa_column=Column(
            SAEnum(ActivityType, native_enum=False, length=50, values_callable=_enum_values),
            nullable=False,
            index=True,
        )
    )
    activity_group: ActivityGroup = Field(
        sa_column=Column(
            SAEnum(ActivityGroup, native_enum=False, length=20, values_callable=_enum_values),
            nullable=False,
            index=True,
        )
    )
    execution_time: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    description: str = Field(default="[]", description="JSON array of {key, value, label} items")
    username: Optional[str] = Field(default=None, max_length=300, description="Email of the acting user")

    def get_description_list(self) -> List[Dict[str, Any]]:
        """Get description items as a list."""
        try:
            return json.loads(self.description) if self.description else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_description_list(self, items: List[Dict[str, Any]]) -> None:
        """Set description items from a list."""
        self.description = json.dumps(items, ensure_ascii=False)
