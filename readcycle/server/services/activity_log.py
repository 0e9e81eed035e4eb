"""
Activity Log Service.

Records administrative changes to books and users and lists them for the
admin console. Recording never fails the caller: any error is logged and
swallowed so the audited operation itself stays successful.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from readcycle.core.database.entities import ActivityGroup, ActivityLog, ActivityType, Book, User
from readcycle.core.database.filters import PageRequest
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import ActivityLogRead, ResultPaginate, build_page
from readcycle.core.monitoring import log_activity

logger = get_logger(__name__)

ARROW = " → "
NONE_VALUE = "none"

Description = Dict[str, Any]


def describe(key: str, value: Any, label: str) -> Description:
    return {"key": key, "value": str(value), "label": label}


def _flag(value: bool) -> str:
    return "True" if value else "False"


def _changed(key: str, label: str, old: Any, new: Any, blank_as_none: bool = False) -> Optional[Description]:
    if old == new:
        return None
    if blank_as_none:
        old = old or NONE_VALUE
        new = new or NONE_VALUE
    return describe(key, f"{old}{ARROW}{new}", label)


# =====================================================================
# Description builders
# =====================================================================


def describe_book_creation(book: Book) -> List[Description]:
    items = [describe("bookId", book.id, "Book id")]
    for key, label in (
        ("category", "Category"),
        ("title", "Title"),
        ("author", "Author"),
        ("publisher", "Publisher"),
        ("thumb", "Thumb"),
    ):
        value = getattr(book, key)
        if value and str(value).strip():
            items.append(describe(key, value, label))
    if book.quantity:
        items.append(describe("quantity", book.quantity, "Quantity"))
    if book.status:
        items.append(describe("status", book.status.value, "Status"))
    items.append(describe("isActive", _flag(book.is_active), "Active"))
    return items


def describe_book_update(old: Dict[str, Any], book: Book) -> List[Description]:
    """Differences between a snapshot of a book and its updated state.

    Only the ``bookId`` item is returned when nothing changed.
    """
    items = [describe("bookId", book.id, "Book id")]
    candidates = [
        _changed("category", "Category", old["category"], book.category),
        _changed("title", "Title", old["title"], book.title),
        _changed("author", "Author", old["author"], book.author),
        _changed("publisher", "Publisher", old["publisher"], book.publisher),
        _changed("thumb", "Thumb", old["thumb"] or None, book.thumb or None, blank_as_none=True),
        _changed("quantity", "Quantity", old["quantity"], book.quantity),
        _changed("isActive", "Active", _flag(old["is_active"]), _flag(book.is_active)),
        _changed("status", "Status", old["status"].value, book.status.value),
    ]
    items.extend(item for item in candidates if item)
    return items


def describe_user_creation(user: User) -> List[Description]:
    items = [describe("userId", user.id, "User id")]
    if user.name and user.name.strip():
        items.append(describe("name", user.name, "Name"))
    if user.email and user.email.strip():
        items.append(describe("email", user.email, "Email"))
    items.append(describe("dateOfBirth", user.date_of_birth, "Date of birth"))
    if user.role_name:
        items.append(describe("role", user.role_name, "Role"))
    return items


def describe_user_update(old: Dict[str, Any], user: User) -> List[Description]:
    items = [describe("userId", user.id, "User id")]
    candidates = [
        _changed("name", "Name", old["name"], user.name),
        _changed("dateOfBirth", "Date of birth", old["date_of_birth"], user.date_of_birth),
        _changed("role", "Role", old["role"], user.role_name, blank_as_none=True),
    ]
    items.extend(item for item in candidates if item)
    return items


def snapshot_book(book: Book) -> Dict[str, Any]:
    return {
        "category": book.category,
        "title": book.title,
        "author": book.author,
        "publisher": book.publisher,
        "thumb": book.thumb,
        "quantity": book.quantity,
        "is_active": book.is_active,
        "status": book.status,
    }


def snapshot_user(user: User) -> Dict[str, Any]:
    return {"name": user.name, "date_of_birth": user.date_of_birth, "role": user.role_name}


# =====================================================================
# Service
# =====================================================================


class ActivityLogService:
    """Write and read audit entries."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def record(
        self,
        activity_group: ActivityGroup,
        activity_type: ActivityType,
        descriptions: List[Description],
        username: Optional[str],
    ) -> Optional[ActivityLog]:
        """Persist one audit entry; errors are logged and None is returned.

        A failed write rolls the shared session back, which expires every
        loaded instance. Callers read what they return before recording.
        """
        try:
            entry = ActivityLog(activity_group=activity_group, activity_type=activity_type, username=username)
            entry.set_description_list(descriptions)
            entry = await self.repos.activity_logs.create(entry)
        except Exception:
            logger.error(f"logging activity error: {activity_type.value}", exc_info=True)
            await self.repos.session.rollback()
            return None
        log_activity(activity_type.value, activity_group.value, username)
        return entry

    async def list_logs(
        self,
        page: PageRequest,
        activity_group: Optional[ActivityGroup] = None,
        activity_types: Optional[Sequence[ActivityType]] = None,
    ) -> ResultPaginate:
        items, total = await self.repos.activity_logs.find_by_criteria(page, activity_group, activity_types)
        return build_page(items, total, page.page, page.size, converter=to_read)


def to_read(entry: ActivityLog) -> ActivityLogRead:
    return ActivityLogRead(
        id=entry.id,
        activity_type=entry.activity_type,
        activity_group=entry.activity_group,
        execution_time=entry.execution_time,
        description=entry.get_description_list(),
        username=entry.username,
    )
