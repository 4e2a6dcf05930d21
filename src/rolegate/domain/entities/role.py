"""Role entity for authorization.

Roles are global named bundles of permissions. The role named
``superadmin`` is reserved and bypasses permission membership checks.
"""

from dataclasses import dataclass, field
from datetime import datetime

from rolegate.domain.entities.permission import Permission

SUPERADMIN_ROLE_NAME = "superadmin"


@dataclass(frozen=True)
class PermissionDetail:
    """A permission held by a role, with the catalog description joined on read."""

    name: str
    description: str | None = None


@dataclass(frozen=True)
class Role:
    """Role entity enriched with permission descriptions.

    Attributes:
        id: Unique identifier (auto-incrementing integer).
        name: Unique, trimmed role name.
        permissions: Names of the permissions the role grants.
        permission_details: Permissions with descriptions, ordered by name.
        description: Optional description of the role's purpose.
        created_at: Timestamp when created.
        updated_at: Timestamp when last updated.
    """

    id: int
    name: str
    permissions: frozenset[str] = field(default_factory=frozenset)
    permission_details: tuple[PermissionDetail, ...] = ()
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.name:
            raise ValueError("Role name is required")

    @property
    def is_superadmin(self) -> bool:
        return self.name == SUPERADMIN_ROLE_NAME

    @classmethod
    def with_permissions(
        cls,
        id: int,
        name: str,
        permissions: list[Permission],
        description: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Role":
        """Build a role from its catalog permissions."""
        ordered = sorted(permissions, key=lambda p: p.name)
        return cls(
            id=id,
            name=name,
            permissions=frozenset(p.name for p in ordered),
            permission_details=tuple(
                PermissionDetail(name=p.name, description=p.description) for p in ordered
            ),
            description=description,
            created_at=created_at,
            updated_at=updated_at,
        )
