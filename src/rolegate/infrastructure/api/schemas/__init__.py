"""API request and response schemas."""

from rolegate.infrastructure.api.schemas.error_schemas import ErrorResponse
from rolegate.infrastructure.api.schemas.permission_schemas import (
    PermissionListResponse,
    PermissionResponse,
)
from rolegate.infrastructure.api.schemas.role_schemas import (
    CreateRoleRequest,
    PermissionDetailResponse,
    RoleAuditEntryResponse,
    RoleAuditListResponse,
    RoleListResponse,
    RoleResponse,
    UpdateRoleRequest,
)

__all__ = [
    "CreateRoleRequest",
    "ErrorResponse",
    "PermissionDetailResponse",
    "PermissionListResponse",
    "PermissionResponse",
    "RoleAuditEntryResponse",
    "RoleAuditListResponse",
    "RoleListResponse",
    "RoleResponse",
    "UpdateRoleRequest",
]
