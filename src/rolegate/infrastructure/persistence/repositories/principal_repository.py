"""Principal repository for read-only lookups.

Principals belong to the identity subsystem; this repository only reads
their role reference.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.entities import PrincipalGrants
from rolegate.infrastructure.persistence.models import (
    PermissionModel,
    PrincipalModel,
    RoleModel,
    role_permissions,
)


class PrincipalRepository:
    """Repository for principal lookups."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def count_by_role(self, role_id: int) -> int:
        """Count the principals assigned to a role.

        Args:
            role_id: Role ID.

        Returns:
            Number of principals referencing the role.
        """
        result = await self.session.execute(
            select(func.count()).select_from(PrincipalModel).where(PrincipalModel.role_id == role_id)
        )
        return result.scalar_one()

    async def get_grants(self, principal_id: str) -> PrincipalGrants | None:
        """Resolve a principal's role and permission names in a single query.

        The principal is outer-joined through its role to the role's
        permissions, so one round trip covers a missing role and a role with
        no permissions alike.

        Args:
            principal_id: Principal ID.

        Returns:
            The principal's grants, or None if the principal does not exist.
        """
        result = await self.session.execute(
            select(RoleModel.id, RoleModel.name, PermissionModel.name)
            .select_from(PrincipalModel)
            .outerjoin(RoleModel, PrincipalModel.role_id == RoleModel.id)
            .outerjoin(role_permissions, role_permissions.c.role_id == RoleModel.id)
            .outerjoin(PermissionModel, role_permissions.c.permission_id == PermissionModel.id)
            .where(PrincipalModel.id == principal_id)
        )
        rows = result.all()
        if not rows:
            return None

        role_id, role_name, _ = rows[0]
        return PrincipalGrants(
            principal_id=principal_id,
            role_id=role_id,
            role_name=role_name,
            permissions=frozenset(name for _, _, name in rows if name is not None),
        )
