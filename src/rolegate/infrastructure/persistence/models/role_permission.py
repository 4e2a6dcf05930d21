"""Association table between roles and permissions.

The foreign keys make every association reference an existing role and an
existing catalog permission. Deleting a role removes its associations;
deleting a permission that a role still holds is refused.
"""

from sqlalchemy import Column, ForeignKey, Integer, Table

from rolegate.infrastructure.persistence.database import Base

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        Integer,
        ForeignKey("permissions.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    ),
)
