"""SQLAlchemy model for the roles table.

Roles are global named bundles of catalog permissions. The role name is
unique at the storage layer.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolegate.infrastructure.persistence.database import Base, utcnow
from rolegate.infrastructure.persistence.models.role_permission import role_permissions


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique role name.
        description: Optional description of the role's purpose.
        created_at: Timestamp when the role was created.
        updated_at: Timestamp when the role was last updated.
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Role name (e.g., 'editor', 'superadmin')",
    )
    description: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Description of the role's purpose",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Relationships
    permissions: Mapped[list["PermissionModel"]] = relationship(  # noqa: F821
        "PermissionModel",
        secondary=role_permissions,
        back_populates="roles",
        order_by="PermissionModel.name",
    )
    principals: Mapped[list["PrincipalModel"]] = relationship(  # noqa: F821
        "PrincipalModel",
        back_populates="role",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
