"""
Authentication Service.

Login, token refresh, logout and email verification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from starlette.concurrency import run_in_threadpool

from readcycle.core.database.entities import SYSTEM_CONFIG_ID, User
from readcycle.core.database.repositories import RepositoryBundle
from readcycle.core.exceptions import AuthenticationError, InvalidError
from readcycle.core.logging_config import get_logger
from readcycle.core.models.io import AccountResponse, LoginRequest, LoginResponse, UserLogin
from readcycle.server.core.constant import MAINTENANCE_MESSAGE, USER_ROLE

from .security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    decode_unverified_subject,
    verify_password,
)

logger = get_logger(__name__)


@dataclass
class IssuedTokens:
    """Login payload together with the refresh token destined for the cookie."""

    response: LoginResponse
    refresh_token: str


def user_login(user: User) -> UserLogin:
    return UserLogin(id=user.id, email=user.email, name=user.name, role=user.role_name)


class AuthService:
    """Sign-in flows."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def _maintenance_mode(self) -> bool:
        config = await self.repos.system_config.get_by_id(SYSTEM_CONFIG_ID)
        return bool(config and config.maintenance_mode)

    async def _issue_tokens(self, user: User) -> IssuedTokens:
        access_token = create_access_token(user)
        refresh_token = create_refresh_token(user)
        user.refresh_token = refresh_token
        await self.repos.users.update(user)
        return IssuedTokens(
            response=LoginResponse(user=user_login(user), access_token=access_token),
            refresh_token=refresh_token,
        )

    async def login(self, payload: LoginRequest) -> IssuedTokens:
        """Check credentials and account state, then issue tokens.

        Raises:
            InvalidError: Bad credentials, unverified or disabled account, or
                maintenance mode for members
        """
        user = await self.repos.users.get_by_email(payload.username)
        if user is None or not await run_in_threadpool(verify_password, payload.password, user.password):
            logger.info(f"Rejected login for {payload.username}")
            raise InvalidError("Bad credentials")
        if not user.email_verified:
            raise InvalidError("Your account has not been verified")
        if not user.active:
            raise InvalidError("Your account has been disabled")
        if user.role_name == USER_ROLE and await self._maintenance_mode():
            raise InvalidError(MAINTENANCE_MESSAGE)

        tokens = await self._issue_tokens(user)
        logger.info(f"User {user.email} signed in")
        return tokens

    def account(self, user: User) -> AccountResponse:
        return AccountResponse(user=user_login(user))

    async def refresh(self, refresh_token: Optional[str]) -> IssuedTokens:
        """Rotate the refresh token stored for the user named by ``refresh_token``."""
        if not refresh_token:
            raise InvalidError("You do not have refresh token in cookies")
        try:
            claims = decode_token(refresh_token)
        except AuthenticationError as e:
            raise InvalidError(f"Refresh token error: {e.message}") from e

        email = claims.get("sub") or ""
        user = await self.repos.users.get_by_refresh_token_and_email(refresh_token, email)
        if user is None:
            raise InvalidError("Refresh token is not valid")
        return await self._issue_tokens(user)

    async def logout(self, user: Optional[User]) -> None:
        if user is None:
            raise InvalidError("Access Token invalid")
        user.refresh_token = None
        await self.repos.users.update(user)
        logger.info(f"User {user.email} signed out")

    async def verify_email(self, token: str) -> bool:
        """Confirm the account the verification token was issued for.

        An expired or tampered token removes the pending, still unverified,
        account of its subject so the address can register again.

        Returns:
            True when the account is now verified
        """
        try:
            decode_token(token)
        except AuthenticationError as e:
            logger.info(f"Email verification failed: {e.message}")
            email = decode_unverified_subject(token)
            if email:
                pending = await self.repos.users.get_by_email(email)
                if pending is not None and not pending.email_verified:
                    await self.repos.users.delete_with_history(pending)
                    logger.info(f"Removed unverified account {email}")
            return False

        user = await self.repos.users.get_by_verification_token(token)
        if user is None:
            return False
        user.email_verified = True
        user.verification_email_token = None
        await self.repos.users.update(user)
        logger.info(f"Email verified for {user.email}")
        return True
