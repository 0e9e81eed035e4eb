"""
Authentication I/O models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel
from .users import EMAIL_PATTERN


class LoginRequest(CamelModel):
    """Credentials posted to the login endpoint."""

    username: Optional[str] = Field(default=None, validate_default=True, description="Account email")
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Please enter username")
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email format")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Please enter password")
        return value


class UserLogin(CamelModel):
    """Identity of the signed-in user."""

    id: int
    email: str
    name: str
    role: Optional[str] = None


class LoginResponse(CamelModel):
    user: UserLogin
    access_token: Optional[str] = Field(default=None, alias="access_token")


class AccountResponse(CamelModel):
    user: UserLogin
