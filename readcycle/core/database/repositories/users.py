"""
User repository.

Data access for user accounts: lookups by email and tokens, criteria
queries for the admin listing and role based counts for the dashboard.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.borrows import Borrow, Cart
from ..entities.roles import Role
from ..entities.users import User
from ..filters import PageRequest
from .base import SQLModelRepository


class UserRepository(SQLModelRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def get_by_refresh_token_and_email(self, refresh_token: str, email: str) -> Optional[User]:
        stmt = select(User).where((User.refresh_token == refresh_token) & (User.email == email))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        stmt = select(User).where(User.verification_email_token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_criteria(
        self,
        page: PageRequest,
        name: Optional[str] = None,
        email: Optional[str] = None,
        date_of_birth: Optional[date] = None,
        role: Optional[str] = None,
    ) -> Tuple[List[User], int]:
        """Page through users matching the admin listing criteria.

        ``name`` and ``email`` match case-insensitively as substrings,
        ``date_of_birth`` and ``role`` (role name) match exactly.
        """
        stmt = select(User)
        if name:
            stmt = stmt.where(User.name.ilike(f"%{name}%"))
        if email:
            stmt = stmt.where(User.email.ilike(f"%{email}%"))
        if date_of_birth:
            stmt = stmt.where(User.date_of_birth == date_of_birth)
        if role:
            stmt = stmt.join(Role, Role.id == User.role_id).where(Role.name == role)
        return await self.paginate(stmt, page)

    async def count_by_role_name(self, role_name: str) -> int:
        stmt = select(User).join(Role, Role.id == User.role_id).where(Role.name == role_name)
        return await self.count(stmt)

    async def detach_role(self, role_id: int) -> None:
        """Clear the role of every user holding ``role_id`` (not committed)."""
        await self.session.execute(sa_update(User).where(User.role_id == role_id).values(role_id=None))

    async def delete_with_history(self, user: User) -> None:
        """Delete a user together with their cart lines and borrow records."""
        await self.session.execute(sa_delete(Cart).where(Cart.user_id == user.id))
        await self.session.execute(sa_delete(Borrow).where(Borrow.user_id == user.id))
        await self.session.delete(user)
        await self.session.commit()
