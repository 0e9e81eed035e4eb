"""Initial schema and seed data for ReadCycle

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

This is the initial migration that creates all tables of the lending service
and seeds the rows the application expects to exist:
- Catalogue, account and lending tables (books, roles, permissions, users,
  borrows, carts)
- Audit and runtime tables (activity_logs, system_config)
- Default ``admin`` and ``user`` roles and the system config row

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(300), nullable=True),
        sa.Column("updated_by", sa.String(300), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create books table
    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("publisher", sa.String(255), nullable=False),
        sa.Column("thumb", sa.String(500), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("status", sa.String(16), nullable=False, server_default="AVAILABLE"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_books_title", "title"),
    )

    # Create roles table
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_roles_name", "name", unique=True),
    )

    # Create permissions table
    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("api_path", sa.String(255), nullable=False),
        sa.Column("method", sa.String(16), nullable=False),
        sa.Column("module", sa.String(100), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create permission_role association table
    op.create_table(
        "permission_role",
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id"), nullable=False),
        sa.Column("permission_id", sa.Integer(), sa.ForeignKey("permissions.id"), nullable=False),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
    )

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(300), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_email_token", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id"), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email", unique=True),
    )

    # Create borrows table
    op.create_table(
        "borrows",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("book_id", sa.Integer(), sa.ForeignKey("books.id"), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="BORROWED"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_borrows_user_id", "user_id"),
        sa.Index("ix_borrows_book_id", "book_id"),
    )

    # Create carts table
    op.create_table(
        "carts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sum", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("book_id", sa.Integer(), sa.ForeignKey("books.id"), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_carts_user_id", "user_id"),
        sa.Index("ix_carts_book_id", "book_id"),
    )

    # Create activity_logs table
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("activity_group", sa.String(20), nullable=False),
        sa.Column("execution_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("username", sa.String(300), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_activity_logs_activity_type", "activity_type"),
        sa.Index("ix_activity_logs_activity_group", "activity_group"),
    )

    # Create system_config table
    op.create_table(
        "system_config",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("maintenance_mode", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    now = datetime.now(timezone.utc)

    # Seed default roles
    roles_table = sa.table(
        "roles",
        sa.column("name", sa.String),
        sa.column("description", sa.String),
        sa.column("active", sa.Boolean),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("created_by", sa.String),
    )
    op.bulk_insert(
        roles_table,
        [
            {
                "name": "admin",
                "description": "Administrator with access to the management APIs",
                "active": True,
                "created_at": now,
                "created_by": "system",
            },
            {
                "name": "user",
                "description": "Library member",
                "active": True,
                "created_at": now,
                "created_by": "system",
            },
        ],
    )

    # Seed the single system config row
    system_config_table = sa.table(
        "system_config",
        sa.column("id", sa.Integer),
        sa.column("maintenance_mode", sa.Boolean),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("created_by", sa.String),
    )
    op.bulk_insert(
        system_config_table,
        [{"id": 1, "maintenance_mode": False, "created_at": now, "created_by": "system"}],
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("system_config")
    op.drop_table("activity_logs")
    op.drop_table("carts")
    op.drop_table("borrows")
    op.drop_table("users")
    op.drop_table("permission_role")
    op.drop_table("permissions")
    op.drop_table("roles")
    op.drop_table("books")
