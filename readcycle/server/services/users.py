"""
User Service.

Business logic for member registration and the administrative management of
accounts. Audited operations write an activity log entry after they succeed.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from starlette.concurrency import run_in_threadpool

from readcycle.core.database.entities import ActivityGroup, ActivityType, User
from readcycle.core.database.filters import PageRequest
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.exceptions import InvalidError
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import (
    ChangePasswordRequest,
    RegisterRequest,
    RegisterResponse,
    ResultPaginate,
    UserCreate,
    UserRead,
    UserUpdate,
    build_page,
)
from readcycle.server.core.constant import SYSTEM_USER, USER_ROLE

from .activity_log import (
    ARROW,
    NONE_VALUE,
    ActivityLogService,
    describe,
    describe_user_creation,
    describe_user_update,
    snapshot_user,
)
from .email import EmailService
from .security import create_verify_email_token, generate_password, hash_password, verify_password

logger = get_logger(__name__)


class UserService:
    """Account registration and administration."""

    def __init__(
        self,
        repos: RepositoryBundle,
        activity_log: Optional[ActivityLogService] = None,
        email: Optional[EmailService] = None,
    ) -> None:
        self.repos = repos
        self.activity_log = activity_log or ActivityLogService(repos)
        self.email = email or EmailService()

    async def get_user_entity(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise InvalidError(f"User with id: {user_id} does not exists")
        return user

    async def _ensure_email_available(self, email: str) -> None:
        if await self.repos.users.exists_by_email(email):
            raise InvalidError("Email already exists")

    async def _new_account(
        self,
        name: str,
        email: str,
        password: str,
        date_of_birth: date,
        role_name: str,
        created_by: str,
    ) -> User:
        role = await self.repos.roles.get_by_name(role_name)
        if role is None:
            raise InvalidError(f"Role with name: {role_name} does not exist")
        user = User(
            name=name,
            email=email,
            password=await run_in_threadpool(hash_password, password),
            date_of_birth=date_of_birth,
            email_verified=False,
            verification_email_token=create_verify_email_token(email),
            active=True,
            created_by=created_by,
        )
        user.role = role
        return await self.repos.users.create(user)

    async def register(self, payload: RegisterRequest) -> RegisterResponse:
        """Self registration: a member account waiting for email verification."""
        await self._ensure_email_available(payload.email)
        user = await self._new_account(
            name=payload.full_name,
            email=payload.email,
            password=payload.password,
            date_of_birth=payload.date_of_birth,
            role_name=USER_ROLE,
            created_by=payload.email,
        )
        logger.info(f"Registered user {user.id} ({user.email})")
        await self.email.send_verification_email(user.name, user.email, user.verification_email_token)
        return RegisterResponse.model_validate(user)

    async def create_user(self, payload: UserCreate, actor: User) -> RegisterResponse:
        """Administrative creation; a random password is generated and mailed."""
        await self._ensure_email_available(payload.email)
        password = generate_password()
        user = await self._new_account(
            name=payload.full_name,
            email=payload.email,
            password=password,
            date_of_birth=payload.date_of_birth,
            role_name=payload.role,
            created_by=actor.email,
        )
        logger.info(f"User {user.id} created by {actor.email}")
        result = RegisterResponse.model_validate(user)
        name, email, token = user.name, user.email, user.verification_email_token
        await self.activity_log.record(
            ActivityGroup.USER, ActivityType.CREATE_USER, describe_user_creation(user), actor.email
        )
        await self.email.send_verification_email(name, email, token, password)
        return result

    async def get_user(self, user_id: int) -> UserRead:
        return UserRead.model_validate(await self.get_user_entity(user_id))

    async def list_users(self, page: PageRequest, expression: Optional[str] = None) -> ResultPaginate:
        items, total = await self.repos.users.find_page(page, expression)
        return build_page(items, total, page.page, page.size, converter=UserRead.model_validate)

    async def search_users(
        self,
        page: PageRequest,
        name: Optional[str] = None,
        email: Optional[str] = None,
        date_of_birth: Optional[date] = None,
        role: Optional[str] = None,
    ) -> ResultPaginate:
        items, total = await self.repos.users.find_by_criteria(page, name, email, date_of_birth, role)
        return build_page(items, total, page.page, page.size, converter=UserRead.model_validate)

    async def update_user(self, payload: UserUpdate, actor: User) -> UserRead:
        user = await self.get_user_entity(payload.id)
        role = await self.repos.roles.get_by_name(payload.role)
        if role is None:
            raise InvalidError(f"Role with name: {payload.role} does not exist")

        old = snapshot_user(user)
        user.name = payload.name
        user.date_of_birth = payload.date_of_birth
        user.role = role
        user.updated_by = actor.email
        user = await self.repos.users.update(user)

        descriptions = describe_user_update(old, user)
        result = UserRead.model_validate(user)
        if len(descriptions) > 1:
            await self.activity_log.record(ActivityGroup.USER, ActivityType.UPDATE_USER, descriptions, actor.email)
        return result

    async def toggle_active(self, user_id: int, actor: Optional[User] = None) -> UserRead:
        user = await self.get_user_entity(user_id)
        user.active = not user.active
        user.updated_by = actor.email if actor else SYSTEM_USER
        user = await self.repos.users.update(user)
        logger.info(f"User {user.id} active set to {user.active}")
        return UserRead.model_validate(user)

    async def delete_user(self, user_id: int, actor: User) -> None:
        user = await self.get_user_entity(user_id)
        if user.id == actor.id:
            raise InvalidError("You can not delete yourself")
        await self.repos.users.delete_with_history(user)
        logger.info(f"User {user_id} deleted by {actor.email}")
        await self.activity_log.record(
            ActivityGroup.USER,
            ActivityType.DELETE_USER,
            [describe("userId", f"{user_id}{ARROW}{NONE_VALUE}", "User id")],
            actor.email,
        )

    async def change_password(self, payload: ChangePasswordRequest, actor: User) -> None:
        """Change the password of the signed-in user."""
        if not await run_in_threadpool(verify_password, payload.password, actor.password):
            raise InvalidError("Incorrect password. Please check again")
        actor.password = await run_in_threadpool(hash_password, payload.new_password)
        actor.updated_by = actor.email
        await self.repos.users.update(actor)
        logger.info(f"Password changed for {actor.email}")
