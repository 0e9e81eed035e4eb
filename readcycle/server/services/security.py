"""
Security Helpers.

Password hashing, JWT handling and the FastAPI dependencies resolving the
signed-in user from the ``Authorization: Bearer`` header.
"""

from __future__ import annotations

import base64
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from readcycle.core.database import get_session
from readcycle.core.database.entities import User
from readcycle.core.database.repositories import UserRepository
from readcycle.core.exceptions import AuthenticationError, PermissionDeniedError
from readcycle.core.logging_config import get_logger
from readcycle.server.core.config import settings
from readcycle.server.core.constant import ADMIN_ROLE

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

PASSWORD_CHARACTERS = string.ascii_lowercase + string.digits
SPECIAL_CHARACTERS = "!@#$%^&*()-_=+"
GENERATED_PASSWORD_LENGTH = 10


# =====================================================================
# Passwords
# =====================================================================


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """Check a password against a bcrypt hash; malformed hashes never match."""
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def generate_password() -> str:
    """Random password of lowercase letters and digits with one special character."""
    rng = secrets.SystemRandom()
    chars = [rng.choice(PASSWORD_CHARACTERS) for _ in range(GENERATED_PASSWORD_LENGTH - 1)]
    chars.append(rng.choice(SPECIAL_CHARACTERS))
    rng.shuffle(chars)
    return "".join(chars)


# =====================================================================
# Tokens
# =====================================================================


def _signing_key() -> bytes:
    return base64.b64decode(settings.jwt.base64_secret)


def _encode(subject: str, claims: Dict[str, Any], validity_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=validity_seconds)).timestamp()),
        **claims,
    }
    return jwt.encode(payload, _signing_key(), algorithm=settings.jwt.algorithm)


def _user_claim(user: User) -> Dict[str, Any]:
    return {"user": {"id": user.id, "email": user.email, "name": user.name}}


def create_access_token(user: User) -> str:
    return _encode(user.email, _user_claim(user), settings.jwt.access_token_validity_seconds)


def create_refresh_token(user: User) -> str:
    return _encode(user.email, _user_claim(user), settings.jwt.refresh_token_validity_seconds)


def create_verify_email_token(email: str) -> str:
    return _encode(email, {"email": email}, settings.jwt.verify_email_token_validity_seconds)


def decode_token(token: str) -> Dict[str, Any]:
    """Verify a token and return its claims.

    Raises:
        AuthenticationError: The token is expired, tampered with or malformed
    """
    try:
        return jwt.decode(token, _signing_key(), algorithms=[settings.jwt.algorithm])
    except ExpiredSignatureError as e:
        raise AuthenticationError(f"Token expired: {e}") from e
    except JWTError as e:
        raise AuthenticationError(str(e)) from e


def decode_unverified_subject(token: str) -> Optional[str]:
    """Read ``sub`` without verifying signature or expiry; None when unreadable."""
    try:
        return jwt.get_unverified_claims(token).get("sub")
    except JWTError:
        return None


# =====================================================================
# Dependencies
# =====================================================================


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> Optional[User]:
    """Resolve the signed-in user, or None when the request carries no valid token."""
    if credentials is None:
        return None
    try:
        claims = decode_token(credentials.credentials)
    except AuthenticationError as e:
        logger.debug(f"Ignoring invalid bearer token: {e.message}")
        return None
    email = claims.get("sub")
    if not email:
        return None
    return await UserRepository(session).get_by_email(email)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Resolve the signed-in user.

    Raises:
        HTTPException: 401 when the token is missing, invalid or names an unknown user
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Full authentication is required to access this resource",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = decode_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    user = await UserRepository(session).get_by_email(claims.get("sub") or "")
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User of the access token does not exist",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only users holding the admin role.

    Raises:
        PermissionDeniedError: The signed-in user is not an administrator
    """
    if user.role_name != ADMIN_ROLE:
        raise PermissionDeniedError("You do not have permission to access this resource")
    return user
