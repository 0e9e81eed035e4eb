"""
User I/O models for API requests and responses.

Validation messages are returned to clients verbatim, so each check raises
with the exact text a form can show next to the field.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from .common import CamelModel, require_text

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 3


def check_email(value: Optional[str]) -> str:
    value = require_text(value, "Email")
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


def parse_date_of_birth(value) -> date:
    """Parse a ``yyyy-MM-dd`` date of birth that lies strictly in the past."""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        if value is None or not str(value).strip():
            raise ValueError("Date of birth is required")
        try:
            value = datetime.strptime(str(value), "%Y-%m-%d").date()
        except ValueError:
            raise ValueError("Invalid date of birth format") from None
    if value >= date.today():
        raise ValueError("Date of birth cannot be equal to or greater than the current date")
    return value


def check_password(value: Optional[str], label: str) -> str:
    value = require_text(value, label)
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"{label} must be greater than or equal to {MIN_PASSWORD_LENGTH}")
    return value


class _PersonNames(CamelModel):
    first_name: Optional[str] = Field(default=None, validate_default=True)
    last_name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    date_of_birth: Optional[date] = Field(default=None, validate_default=True)

    @field_validator("first_name")
    @classmethod
    def _check_first_name(cls, value: Optional[str]) -> str:
        return require_text(value, "First name", longer_than=1)

    @field_validator("last_name")
    @classmethod
    def _check_last_name(cls, value: Optional[str]) -> str:
        return require_text(value, "Last name", longer_than=1)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> str:
        return check_email(value)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _check_date_of_birth(cls, value) -> date:
        return parse_date_of_birth(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class RegisterRequest(_PersonNames):
    """Self registration of a member account."""

    password: Optional[str] = Field(default=None, validate_default=True)
    confirm_password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Optional[str]) -> str:
        return check_password(value, "Password")

    @field_validator("confirm_password")
    @classmethod
    def _check_confirm_password(cls, value: Optional[str]) -> str:
        return check_password(value, "Confirm password")

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Incorrect password, please check again")
        return self


class UserCreate(_PersonNames):
    """Account created by an administrator; the password is generated."""

    role: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: Optional[str]) -> str:
        return require_text(value, "Role")


class UserUpdate(CamelModel):
    """Administrative update of an account."""

    id: int
    name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = None
    date_of_birth: Optional[date] = Field(default=None, validate_default=True)
    role: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str]) -> str:
        return require_text(value, "Name")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _check_date_of_birth(cls, value) -> date:
        return parse_date_of_birth(value)

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: Optional[str]) -> str:
        return require_text(value, "Role")


class ChangePasswordRequest(CamelModel):
    """Password change of the signed-in user."""

    username: Optional[str] = None
    password: Optional[str] = Field(default=None, validate_default=True)
    new_password: Optional[str] = Field(default=None, validate_default=True)
    confirm_new_password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Optional[str]) -> str:
        return require_text(value, "Password")

    @field_validator("new_password")
    @classmethod
    def _check_new_password(cls, value: Optional[str]) -> str:
        return check_password(value, "New password")

    @field_validator("confirm_new_password")
    @classmethod
    def _check_confirm_new_password(cls, value: Optional[str]) -> str:
        return check_password(value, "Confirm new password")

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.confirm_new_password:
            raise ValueError("Incorrect password, please check again")
        return self


class RoleSummary(CamelModel):
    id: int
    name: str


class RegisterResponse(CamelModel):
    """Schema returned after registration or administrative creation."""

    id: int
    name: str
    email: str
    date_of_birth: Optional[date] = None
    created_at: Optional[datetime] = None


class UserRead(CamelModel):
    """Schema for reading a user account."""

    id: int
    name: str
    email: str
    date_of_birth: Optional[date] = None
    created_at: Optional[datetime] = None
    role: Optional[RoleSummary] = None
    active: bool
