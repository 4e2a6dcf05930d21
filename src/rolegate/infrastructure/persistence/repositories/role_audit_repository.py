"""Repository for the role audit trail."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.entities import RoleAuditAction
from rolegate.infrastructure.persistence.models import RoleAuditModel


class RoleAuditRepository:
    """Repository for role audit entries.

    Entries are append-only: there are no update or delete operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def record(
        self,
        action: RoleAuditAction,
        role_id: int,
        actor_id: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> RoleAuditModel:
        """Append an audit entry in the current transaction.

        Args:
            action: Mutation kind.
            role_id: ID of the changed role.
            actor_id: Principal that made the change.
            old_values: Snapshot before the change.
            new_values: Snapshot after the change.

        Returns:
            The created audit model.
        """
        entry = RoleAuditModel(
            action=action.value,
            role_id=role_id,
            actor_id=actor_id,
            old_values=old_values,
            new_values=new_values,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def list_for_role(self, role_id: int) -> list[RoleAuditModel]:
        """List audit entries for a role, oldest first."""
        result = await self.session.execute(
            select(RoleAuditModel)
            .where(RoleAuditModel.role_id == role_id)
            .order_by(RoleAuditModel.id)
        )
        return list(result.scalars().all())
