"""Domain services for RoleGate.

Services contain the authorization logic: the permission catalog, the role
mutator and the decision engine.
"""

from rolegate.domain.services.authorization_engine import (
    AuthorizationDecision,
    AuthorizationEngine,
    DenialReason,
)
from rolegate.domain.services.permission_catalog import PermissionCatalog
from rolegate.domain.services.role_service import RoleService

__all__ = [
    "AuthorizationDecision",
    "AuthorizationEngine",
    "DenialReason",
    "PermissionCatalog",
    "RoleService",
]
