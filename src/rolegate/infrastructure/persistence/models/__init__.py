"""SQLAlchemy models for the RoleGate tables.

All models inherit from the Base class defined in database.py.
"""

from rolegate.infrastructure.persistence.models.permission import PermissionModel
from rolegate.infrastructure.persistence.models.principal import PrincipalModel
from rolegate.infrastructure.persistence.models.role import RoleModel
from rolegate.infrastructure.persistence.models.role_audit import RoleAuditModel
from rolegate.infrastructure.persistence.models.role_permission import role_permissions

__all__ = [
    "PermissionModel",
    "PrincipalModel",
    "RoleAuditModel",
    "RoleModel",
    "role_permissions",
]
