"""Permission repository for database operations."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.infrastructure.persistence.models import PermissionModel


class PermissionRepository:
    """Repository for permission catalog database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, permission: PermissionModel) -> PermissionModel:
        """Create a new permission.

        Only catalog seeding calls this; the authorization core never does.

        Args:
            permission: Permission model to create.

        Returns:
            Created permission model.
        """
        self.session.add(permission)
        await self.session.flush()
        return permission

    async def get_by_name(self, name: str) -> PermissionModel | None:
        """Get a permission by its exact name.

        Args:
            name: Permission name (e.g., 'doc:read').

        Returns:
            Permission model if found, None otherwise.
        """
        result = await self.session.execute(
            select(PermissionModel).where(PermissionModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_by_names(self, names: Iterable[str]) -> list[PermissionModel]:
        """Get all permissions whose name is in ``names``.

        Args:
            names: Permission names to look up.

        Returns:
            Matching permission models ordered by name. Unknown names are
            simply absent from the result.
        """
        wanted = set(names)
        if not wanted:
            return []
        result = await self.session.execute(
            select(PermissionModel)
            .where(PermissionModel.name.in_(wanted))
            .order_by(PermissionModel.name)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[PermissionModel]:
        """List all permissions.

        Returns:
            List of all permission models ordered by name.
        """
        result = await self.session.execute(
            select(PermissionModel).order_by(PermissionModel.name)
        )
        return list(result.scalars().all())
