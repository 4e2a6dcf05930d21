"""Role API schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from rolegate.domain.entities import Role, RoleAuditEntry


class CreateRoleRequest(BaseModel):
    """Request schema for creating a role.

    The name is trimmed and checked for blankness by the role service, so a
    blank name is reported like any other domain validation error.

    Attributes:
        name: Role name (e.g., 'editor', 'viewer').
        permissions: Names of catalog permissions to grant.
        description: Optional description of the role's purpose.
    """

    name: str
    permissions: list[str] = Field(default_factory=list)
    description: str | None = None


class UpdateRoleRequest(BaseModel):
    """Request schema for updating a role.

    Omitted fields are left unchanged. A provided ``permissions`` list
    replaces the role's whole permission set.

    Attributes:
        name: New role name.
        permissions: Complete new set of permission names.
        description: New description.
    """

    name: str | None = None
    permissions: list[str] | None = None
    description: str | None = None


class PermissionDetailResponse(BaseModel):
    """A permission held by a role, with its catalog description."""

    name: str
    description: str | None = None


class RoleResponse(BaseModel):
    """Response schema for a role.

    Attributes:
        id: Role ID.
        name: Role name.
        description: Role description.
        permissions: Permission names, ordered by name.
        permissions_detail: Permissions with descriptions, ordered by name.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: int
    name: str
    description: str | None = None
    permissions: list[str]
    permissions_detail: list[PermissionDetailResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResponse":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            permissions=[d.name for d in role.permission_details],
            permissions_detail=[
                PermissionDetailResponse(name=d.name, description=d.description)
                for d in role.permission_details
            ],
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class RoleListResponse(BaseModel):
    """Response schema for listing roles.

    Attributes:
        items: Roles ordered by name.
        total: Number of roles.
    """

    items: list[RoleResponse]
    total: int


class RoleAuditEntryResponse(BaseModel):
    """Response schema for a role audit entry."""

    id: int
    action: str
    role_id: int
    actor_id: str | None = None
    old_values: dict | None = None
    new_values: dict | None = None
    occurred_at: datetime | None = None

    @classmethod
    def from_entity(cls, entry: RoleAuditEntry) -> "RoleAuditEntryResponse":
        return cls(
            id=entry.id,
            action=entry.action.value,
            role_id=entry.role_id,
            actor_id=entry.actor_id,
            old_values=entry.old_values,
            new_values=entry.new_values,
            occurred_at=entry.occurred_at,
        )


class RoleAuditListResponse(BaseModel):
    """Response schema for a role's audit trail, oldest first."""

    items: list[RoleAuditEntryResponse]
    total: int
