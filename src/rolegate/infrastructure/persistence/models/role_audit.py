"""SQLAlchemy model for the role_audit_log table.

Each row records one committed role mutation with before/after snapshots.
Rows are written inside the mutation's transaction.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from rolegate.infrastructure.persistence.database import Base, utcnow


class RoleAuditModel(Base):
    """SQLAlchemy model for the role_audit_log table.

    Attributes:
        id: Primary key (auto-incrementing, serves as sequence number).
        action: CREATE, UPDATE or DELETE.
        role_id: ID of the role that was changed. Not a foreign key, so the
            history survives the role's deletion.
        actor_id: ID of the principal that made the change.
        old_values: Role snapshot before the change.
        new_values: Role snapshot after the change.
        occurred_at: Timestamp when the change occurred.
    """

    __tablename__ = "role_audit_log"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    action: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        index=True,
        comment="CREATE, UPDATE or DELETE",
    )
    role_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="ID of the changed role",
    )
    actor_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        comment="Principal that made the change",
    )
    old_values: Mapped[dict[str, Any] | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    new_values: Mapped[dict[str, Any] | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<RoleAudit(id={self.id}, action={self.action}, role_id={self.role_id})>"
