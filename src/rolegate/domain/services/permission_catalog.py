"""Permission catalog service.

The catalog is the read-only universe of valid permission names. Permissions
are seeded outside the core; nothing here creates, renames or deletes them.
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.core.logging import get_logger
from rolegate.domain.entities import Permission
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.services.storage_errors import storage_errors
from rolegate.infrastructure.persistence.database import DatabaseManager
from rolegate.infrastructure.persistence.models import PermissionModel
from rolegate.infrastructure.persistence.repositories import PermissionRepository

logger = get_logger(__name__)


class PermissionCatalog:
    """Queries and validates permission names against the catalog."""

    def __init__(self, db: DatabaseManager) -> None:
        """Initialize the catalog.

        Args:
            db: Datastore handle.
        """
        self.db = db

    async def resolve(self, names: Iterable[str], session: AsyncSession) -> list[PermissionModel]:
        """Load the catalog rows for ``names``, failing on any unknown name.

        Runs on the caller's session so the lookup shares the caller's
        transaction.

        Args:
            names: Permission names to resolve. Duplicates are collapsed.
            session: Session of the surrounding unit of work.

        Returns:
            Permission models ordered by name. Empty input yields an empty list.

        Raises:
            ValidationError: If any name is not in the catalog. Every unknown
                name is reported, not only the first.
        """
        wanted = set(names)
        if not wanted:
            return []

        found = await PermissionRepository(session).get_by_names(wanted)
        missing = wanted - {p.name for p in found}
        if missing:
            logger.info("Rejected unknown permission names", invalid_names=sorted(missing))
            raise ValidationError.unknown_permissions(missing)
        return found

    async def validate_names(
        self, names: Iterable[str], session: AsyncSession | None = None
    ) -> set[str]:
        """Check that every name exists in the catalog.

        Args:
            names: Permission names to validate.
            session: Optional session to run the check in. A short read
                session is opened when omitted.

        Returns:
            The validated set of names.

        Raises:
            ValidationError: If any name is unknown.
            ServiceError: If the datastore fails.
        """
        async with storage_errors():
            if session is not None:
                return {p.name for p in await self.resolve(names, session)}
            async with self.db.session() as own_session:
                return {p.name for p in await self.resolve(names, own_session)}

    async def list_permissions(self) -> list[Permission]:
        """List the whole catalog.

        Returns:
            All permissions ordered by name.

        Raises:
            ServiceError: If the datastore fails.
        """
        async with storage_errors(), self.db.session() as session:
            models = await PermissionRepository(session).list_all()
        return [Permission(id=m.id, name=m.name, description=m.description) for m in models]
