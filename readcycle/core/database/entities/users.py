"""
User entity models.

Users sign in with their email. Self-registered accounts stay unverified
until the emailed verification link is followed.
"""

from datetime import date
from typing import Optional

from sqlmodel import Field, Relationship

from ..base import AuditedBase
from .roles import Role


class UserBase(AuditedBase):
    """Base fields for a user account."""

    name: str = Field(max_length=50, description="Display name")
    email: str = Field(max_length=300, unique=True, index=True, description="Sign-in email")
    password: str = Field(max_length=255, description="bcrypt password hash")
    date_of_birth: Optional[date] = Field(default=None, description="Date of birth")
    refresh_token: Optional[str] = Field(default=None, description="Currently valid refresh token")
    email_verified: bool = Field(default=False, description="Whether the email was verified")
    verification_email_token: Optional[str] = Field(default=None, description="Pending verification token")
    active: bool = Field(default=True, description="Disabled accounts cannot sign in")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    role_id: Optional[int] = Field(default=None, foreign_key="roles.id")

    role: Optional[Role] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    @property
    def role_name(self) -> Optional[str]:
        return self.role.name if self.role else None

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
