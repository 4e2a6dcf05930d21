"""SQLAlchemy model for the principals table.

Principals are created and authenticated by an external identity subsystem.
The authorization core only reads the role reference. The restricting
foreign key keeps a role from being deleted while it is still assigned.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolegate.infrastructure.persistence.database import Base, utcnow


class PrincipalModel(Base):
    """SQLAlchemy model for the principals table.

    Attributes:
        id: Primary key (UUID string).
        role_id: Foreign key to roles table, None if no role is assigned.
        created_at: Timestamp when the principal was created.
    """

    __tablename__ = "principals"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Principal ID (UUID)",
    )
    role_id: Mapped[int | None] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="Foreign key to roles table",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    # Relationships
    role: Mapped["RoleModel"] = relationship(  # noqa: F821
        "RoleModel",
        back_populates="principals",
    )

    def __repr__(self) -> str:
        return f"<Principal(id={self.id}, role_id={self.role_id})>"
