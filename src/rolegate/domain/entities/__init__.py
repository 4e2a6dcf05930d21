"""Domain entities for RoleGate.

Entities are pure Python dataclasses that represent core authorization concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from rolegate.domain.entities.permission import Permission
from rolegate.domain.entities.principal import AuthenticatedPrincipal, PrincipalGrants
from rolegate.domain.entities.role import SUPERADMIN_ROLE_NAME, PermissionDetail, Role
from rolegate.domain.entities.role_audit import RoleAuditAction, RoleAuditEntry

__all__ = [
    "AuthenticatedPrincipal",
    "Permission",
    "PermissionDetail",
    "PrincipalGrants",
    "Role",
    "RoleAuditAction",
    "RoleAuditEntry",
    "SUPERADMIN_ROLE_NAME",
]
