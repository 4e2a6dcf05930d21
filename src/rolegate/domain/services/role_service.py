"""Role management service.

The role service is the only writer of roles and their permission
associations. Every mutation runs as one unit of work: the role is loaded,
validated and written, and an audit entry is recorded, all in a single
transaction. Any error rolls the whole transaction back.

Duplicate-name and in-use checks are done up front for a readable error, but
the unique constraint on ``roles.name`` and the restricting foreign key on
``principals.role_id`` are what actually hold under concurrent writers. Their
violations are translated to ``ConflictError`` here.
"""

from collections.abc import Iterable
from typing import Any

from rolegate.core.logging import get_logger
from rolegate.domain.entities import (
    SUPERADMIN_ROLE_NAME,
    AuthenticatedPrincipal,
    Permission,
    Role,
    RoleAuditAction,
    RoleAuditEntry,
)
from rolegate.domain.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from rolegate.domain.services.permission_catalog import PermissionCatalog
from rolegate.domain.services.storage_errors import storage_errors
from rolegate.infrastructure.persistence.database import DatabaseManager, utcnow
from rolegate.infrastructure.persistence.models import RoleAuditModel, RoleModel
from rolegate.infrastructure.persistence.repositories import (
    PrincipalRepository,
    RoleAuditRepository,
    RoleRepository,
)

logger = get_logger(__name__)


def _to_entity(model: RoleModel) -> Role:
    return Role.with_permissions(
        id=model.id,
        name=model.name,
        permissions=[
            Permission(id=p.id, name=p.name, description=p.description)
            for p in model.permissions
        ],
        description=model.description,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_audit_entry(model: RoleAuditModel) -> RoleAuditEntry:
    return RoleAuditEntry(
        id=model.id,
        action=RoleAuditAction(model.action),
        role_id=model.role_id,
        actor_id=model.actor_id,
        old_values=model.old_values,
        new_values=model.new_values,
        occurred_at=model.occurred_at,
    )


def _snapshot(model: RoleModel) -> dict[str, Any]:
    """Audit snapshot of a role's mutable state."""
    return {
        "name": model.name,
        "description": model.description,
        "permissions": sorted(p.name for p in model.permissions),
    }


def _actor_id(actor: AuthenticatedPrincipal | None) -> str | None:
    return actor.principal_id if actor is not None else None


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Role name is required")
    return cleaned


class RoleService:
    """Service for creating, reading, updating and deleting roles."""

    def __init__(self, db: DatabaseManager, catalog: PermissionCatalog | None = None) -> None:
        """Initialize the service.

        Args:
            db: Datastore handle.
            catalog: Permission catalog used to validate permission names.
                Built from ``db`` when omitted.
        """
        self.db = db
        self.catalog = catalog or PermissionCatalog(db)

    async def create_role(
        self,
        name: str,
        permission_names: Iterable[str] = (),
        description: str | None = None,
        actor: AuthenticatedPrincipal | None = None,
    ) -> Role:
        """Create a role granting the given permissions.

        Args:
            name: Role name. Surrounding whitespace is stripped.
            permission_names: Names of catalog permissions to grant.
            description: Optional description.
            actor: Principal performing the change, recorded in the audit log.

        Returns:
            The created role, enriched with permission descriptions.

        Raises:
            ValidationError: If the name is blank or a permission is unknown.
            ConflictError: If a role with the same name exists.
            ServiceError: If the datastore fails.
        """
        role_name = _clean_name(name)
        conflict = f"Role '{role_name}' already exists"

        async with storage_errors(conflict), self.db.unit_of_work() as session:
            role_repo = RoleRepository(session)
            if await role_repo.get_by_name(role_name) is not None:
                raise ConflictError(conflict)

            permissions = await self.catalog.resolve(permission_names, session)
            role = RoleModel(name=role_name, description=description, permissions=permissions)
            await role_repo.create(role)

            await RoleAuditRepository(session).record(
                RoleAuditAction.CREATE,
                role.id,
                actor_id=_actor_id(actor),
                new_values=_snapshot(role),
            )
            created = _to_entity(role)

        logger.info(
            "Role created",
            role_id=created.id,
            role_name=created.name,
            permissions=sorted(created.permissions),
            actor_id=_actor_id(actor),
        )
        return created

    async def list_roles(self) -> list[Role]:
        """List all roles ordered by name."""
        async with storage_errors(), self.db.session() as session:
            models = await RoleRepository(session).list_all()
            return [_to_entity(m) for m in models]

    async def get_role(self, role_id: int) -> Role:
        """Get a single role.

        Args:
            role_id: Role ID.

        Returns:
            The role, enriched with permission descriptions.

        Raises:
            NotFoundError: If the role does not exist.
        """
        async with storage_errors(), self.db.session() as session:
            model = await RoleRepository(session).get_by_id(role_id)
            if model is None:
                raise NotFoundError(f"Role {role_id} not found")
            return _to_entity(model)

    async def update_role(
        self,
        role_id: int,
        name: str | None = None,
        permission_names: Iterable[str] | None = None,
        description: str | None = None,
        actor: AuthenticatedPrincipal | None = None,
    ) -> Role:
        """Update a role. Omitted fields are left unchanged.

        A provided ``permission_names`` replaces the whole permission set; an
        empty collection clears it.

        Args:
            role_id: Role ID.
            name: New name. Surrounding whitespace is stripped.
            permission_names: Complete new set of permission names.
            description: New description.
            actor: Principal performing the change, recorded in the audit log.

        Returns:
            The updated role.

        Raises:
            NotFoundError: If the role does not exist.
            ValidationError: If the new name is blank or a permission is unknown.
            ConflictError: If another role already has the new name.
            ServiceError: If the datastore fails.
        """
        new_name = _clean_name(name) if name is not None else None
        conflict = f"Role '{new_name}' already exists" if new_name is not None else None

        async with storage_errors(conflict), self.db.unit_of_work() as session:
            role_repo = RoleRepository(session)
            role = await role_repo.get_by_id(role_id)
            if role is None:
                raise NotFoundError(f"Role {role_id} not found")

            before = _snapshot(role)

            if new_name is not None and new_name != role.name:
                if await role_repo.get_by_name(new_name, exclude_id=role.id) is not None:
                    raise ConflictError(conflict)
                if SUPERADMIN_ROLE_NAME in (role.name, new_name):
                    logger.warning(
                        "Rename changes which role holds superadmin authority",
                        role_id=role.id,
                        old_name=role.name,
                        new_name=new_name,
                    )
                role.name = new_name

            if permission_names is not None:
                role.permissions = await self.catalog.resolve(permission_names, session)

            if description is not None:
                role.description = description

            role.updated_at = utcnow()
            await session.flush()

            await RoleAuditRepository(session).record(
                RoleAuditAction.UPDATE,
                role.id,
                actor_id=_actor_id(actor),
                old_values=before,
                new_values=_snapshot(role),
            )
            updated = _to_entity(role)

        logger.info(
            "Role updated",
            role_id=updated.id,
            role_name=updated.name,
            permissions=sorted(updated.permissions),
            actor_id=_actor_id(actor),
        )
        return updated

    async def delete_role(
        self, role_id: int, actor: AuthenticatedPrincipal | None = None
    ) -> None:
        """Delete a role and its permission associations.

        Catalog permissions are never touched.

        Args:
            role_id: Role ID.
            actor: Principal performing the change, recorded in the audit log.

        Raises:
            NotFoundError: If the role does not exist.
            ConflictError: If any principal is still assigned the role.
            ServiceError: If the datastore fails.
        """
        conflict = f"Role {role_id} is in use and cannot be deleted"

        async with storage_errors(conflict), self.db.unit_of_work() as session:
            role_repo = RoleRepository(session)
            role = await role_repo.get_by_id(role_id)
            if role is None:
                raise NotFoundError(f"Role {role_id} not found")

            assigned = await PrincipalRepository(session).count_by_role(role.id)
            if assigned:
                raise ConflictError(
                    f"Role '{role.name}' is in use by {assigned} principal(s) and cannot be deleted"
                )

            before = _snapshot(role)
            role_name = role.name
            await role_repo.delete(role)

            await RoleAuditRepository(session).record(
                RoleAuditAction.DELETE,
                role_id,
                actor_id=_actor_id(actor),
                old_values=before,
            )

        logger.info(
            "Role deleted", role_id=role_id, role_name=role_name, actor_id=_actor_id(actor)
        )

    async def list_role_audit(self, role_id: int) -> list[RoleAuditEntry]:
        """List the recorded changes of a role, oldest first.

        Entries of deleted roles remain available.

        Args:
            role_id: Role ID.

        Returns:
            Audit entries, empty if the role was never changed.
        """
        async with storage_errors(), self.db.session() as session:
            models = await RoleAuditRepository(session).list_for_role(role_id)
            return [_to_audit_entry(m) for m in models]
