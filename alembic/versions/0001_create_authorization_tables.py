"""create_authorization_tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:12:31.408215

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="Capability identifier (e.g., 'doc:read')",
        ),
        sa.Column(
            "description",
            sa.String(length=255),
            nullable=True,
            comment="Human-readable description",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_permissions_name", "permissions", ["name"], unique=True)

    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(length=100),
            nullable=False,
            comment="Role name (e.g., 'editor', 'superadmin')",
        ),
        sa.Column(
            "description",
            sa.String(length=255),
            nullable=True,
            comment="Description of the role's purpose",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_roles_name", "roles", ["name"], unique=True)

    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permissions.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
    )
    op.create_index(
        "ix_role_permissions_permission_id", "role_permissions", ["permission_id"]
    )

    op.create_table(
        "principals",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Principal ID (UUID)"),
        sa.Column(
            "role_id",
            sa.Integer(),
            nullable=True,
            comment="Foreign key to roles table",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_principals_role_id", "principals", ["role_id"])

    json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
    op.create_table(
        "role_audit_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "action",
            sa.String(length=10),
            nullable=False,
            comment="CREATE, UPDATE or DELETE",
        ),
        sa.Column("role_id", sa.Integer(), nullable=False, comment="ID of the changed role"),
        sa.Column(
            "actor_id",
            sa.String(length=36),
            nullable=True,
            comment="Principal that made the change",
        ),
        sa.Column("old_values", json_type, nullable=True),
        sa.Column("new_values", json_type, nullable=True),
        sa.Column(
            "occurred_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_role_audit_log_action", "role_audit_log", ["action"])
    op.create_index("ix_role_audit_log_role_id", "role_audit_log", ["role_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_role_audit_log_role_id", table_name="role_audit_log")
    op.drop_index("ix_role_audit_log_action", table_name="role_audit_log")
    op.drop_table("role_audit_log")
    op.drop_index("ix_principals_role_id", table_name="principals")
    op.drop_table("principals")
    op.drop_index("ix_role_permissions_permission_id", table_name="role_permissions")
    op.drop_table("role_permissions")
    op.drop_index("ix_roles_name", table_name="roles")
    op.drop_table("roles")
    op.drop_index("ix_permissions_name", table_name="permissions")
    op.drop_table("permissions")
