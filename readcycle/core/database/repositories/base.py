"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations in the centralized database layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now
from ..filters import PageRequest, QueryBuilder

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class BaseRepository(ABC, Generic[EntityType]):
    """Base repository interface with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with database session and SQLModel entity class.

        Args:
            session: Async SQLModel Session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity record.

        Args:
            entity: SQLModel instance with updated fields

        Returns:
            Updated entity instance
        """

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and filtering.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances
        """


class SQLModelRepository(BaseRepository[EntityType]):
    """Default CRUD implementation shared by the concrete repositories.

    Write methods commit by default. ``stage`` only flushes, so several
    changes can be committed (or rolled back) together by the caller.
    """

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        stmt = select(self.model).where(self.model.id == entity_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, entity: EntityType) -> EntityType:
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def stage(self, entity: EntityType) -> EntityType:
        """Add the entity to the unit of work and flush without committing."""
        if getattr(entity, "id", None) is not None and hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity_id: int) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        stmt = select(self.model).order_by(self.model.id)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, stmt=None) -> int:
        """Count rows matched by ``stmt`` (all rows when omitted)."""
        if stmt is None:
            stmt = select(self.model)
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await self.session.execute(count_stmt)
        return int(result.scalar_one())

    async def paginate(self, stmt, page: PageRequest, default_order=None) -> Tuple[List[EntityType], int]:
        """Run ``stmt`` for one page.

        Args:
            stmt: Filtered select statement
            page: Requested page, size and optional sort
            default_order: Ordering used when the page carries no sort

        Returns:
            Tuple of (entities on the page, total matching rows)
        """
        total = await self.count(stmt)
        if default_order is None:
            default_order = self.model.id
        stmt = QueryBuilder.apply_sort(stmt, self.model, page.sort, default=default_order)
        stmt = QueryBuilder.apply_pagination(stmt, page.size, page.offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def find_page(
        self, page: PageRequest, expression: Optional[str] = None, filters: Optional[Dict[str, Any]] = None
    ) -> Tuple[List[EntityType], int]:
        """Page through the table with an optional filter expression and equality filters."""
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_expression(stmt, self.model, expression)
        return await self.paginate(stmt, page)
