"""Permission API schemas."""

from pydantic import BaseModel

from rolegate.domain.entities import Permission


class PermissionResponse(BaseModel):
    """Response schema for a catalog permission.

    Attributes:
        id: Permission ID.
        name: Permission name (e.g., 'doc:read').
        description: Optional description.
    """

    id: int
    name: str
    description: str | None = None

    @classmethod
    def from_entity(cls, permission: Permission) -> "PermissionResponse":
        return cls(id=permission.id, name=permission.name, description=permission.description)


class PermissionListResponse(BaseModel):
    """Response schema for listing the permission catalog."""

    items: list[PermissionResponse]
    total: int
