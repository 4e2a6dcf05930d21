"""Role repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rolegate.infrastructure.persistence.models import RoleModel


class RoleRepository:
    """Repository for role database operations.

    Roles are always loaded together with their permissions, since the
    permission collection is needed for enrichment, replacement and deletion.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, role: RoleModel) -> RoleModel:
        """Create a new role.

        Args:
            role: Role model to create.

        Returns:
            Created role model with its ID assigned.

        Raises:
            IntegrityError: If the name is already taken.
        """
        self.session.add(role)
        await self.session.flush()
        return role

    async def get_by_id(self, role_id: int) -> RoleModel | None:
        """Get a role by ID.

        Args:
            role_id: Role ID.

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel)
            .options(selectinload(RoleModel.permissions))
            .where(RoleModel.id == role_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str, exclude_id: int | None = None) -> RoleModel | None:
        """Get a role by name.

        Args:
            name: Role name (exact match).
            exclude_id: Role ID to ignore, used when renaming a role.

        Returns:
            Role model if found, None otherwise.
        """
        query = select(RoleModel).where(RoleModel.name == name)
        if exclude_id is not None:
            query = query.where(RoleModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[RoleModel]:
        """List all roles.

        Returns:
            List of all role models ordered by name.
        """
        result = await self.session.execute(
            select(RoleModel)
            .options(selectinload(RoleModel.permissions))
            .order_by(RoleModel.name)
        )
        return list(result.scalars().all())

    async def delete(self, role: RoleModel) -> None:
        """Delete a role and its permission associations.

        Args:
            role: Role model loaded through this repository.

        Raises:
            IntegrityError: If a principal still references the role.
        """
        await self.session.delete(role)
        await self.session.flush()
