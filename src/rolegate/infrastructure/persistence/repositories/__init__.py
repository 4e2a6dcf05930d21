"""Persistence repositories for database operations."""

from rolegate.infrastructure.persistence.repositories.permission_repository import (
    PermissionRepository,
)
from rolegate.infrastructure.persistence.repositories.principal_repository import (
    PrincipalRepository,
)
from rolegate.infrastructure.persistence.repositories.role_audit_repository import (
    RoleAuditRepository,
)
from rolegate.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)

__all__ = [
    "PermissionRepository",
    "PrincipalRepository",
    "RoleAuditRepository",
    "RoleRepository",
]
