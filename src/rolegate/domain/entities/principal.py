"""Principal value objects.

Principals are owned by an external identity subsystem. The core receives an
already verified identity and reads the principal's role reference.
"""

from dataclasses import dataclass, field

from rolegate.domain.entities.role import SUPERADMIN_ROLE_NAME


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Verified identity passed explicitly through the call chain.

    Attributes:
        principal_id: ID of the principal record.
        role_name_hint: Role name claimed by the credential. Never trusted
            for a decision; only compared against the stored role.
    """

    principal_id: str
    role_name_hint: str | None = None


@dataclass(frozen=True)
class PrincipalGrants:
    """Effective permission set of a principal, read in one query.

    Attributes:
        principal_id: ID of the principal.
        role_id: Assigned role ID, None if the principal has no role.
        role_name: Assigned role name, None if the principal has no role.
        permissions: Names of the permissions granted by the role.
    """

    principal_id: str
    role_id: int | None = None
    role_name: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_superadmin(self) -> bool:
        return self.role_name == SUPERADMIN_ROLE_NAME

    def grants(self, permission: str) -> bool:
        """Exact, case-sensitive membership check; superadmin grants everything."""
        return self.is_superadmin or permission in self.permissions
