"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class AuditedBase(Base):
    """Audit columns shared by the business tables."""

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(
        default=None, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )
    created_by: Optional[str] = Field(default=None, max_length=300)
    updated_by: Optional[str] = Field(default=None, max_length=300)
