"""SQLAlchemy model for the permissions table.

Permissions form the catalog of valid capability identifiers. Rows are
seeded outside the authorization core and never modified by it.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolegate.infrastructure.persistence.database import Base
from rolegate.infrastructure.persistence.models.role_permission import role_permissions


class PermissionModel(Base):
    """SQLAlchemy model for the permissions table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique capability identifier (e.g., 'doc:read').
        description: Optional human-readable description.
    """

    __tablename__ = "permissions"

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
        comment="Capability identifier (e.g., 'doc:read')",
    )
    description: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Human-readable description",
    )

    # Relationships
    roles: Mapped[list["RoleModel"]] = relationship(  # noqa: F821
        "RoleModel",
        secondary=role_permissions,
        back_populates="permissions",
    )

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, name={self.name})>"
