"""Unit tests for RoleService."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from rolegate.core.config import Settings
from rolegate.domain.entities import AuthenticatedPrincipal, RoleAuditAction
from rolegate.domain.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from rolegate.domain.services import RoleService
from rolegate.infrastructure.persistence.database import DatabaseManager
from rolegate.infrastructure.persistence.repositories import (
    PrincipalRepository,
    RoleAuditRepository,
    RoleRepository,
)
from rolegate.infrastructure.persistence.seed import seed_permissions


class TestCreateRole:
    """Tests for RoleService.create_role."""

    @pytest.mark.asyncio
    async def test_create_with_known_permissions(self, role_service):
        role = await role_service.create_role("Editor", ["doc:read", "doc:write"])

        assert role.id is not None
        assert role.name == "Editor"
        assert role.permissions == frozenset({"doc:read", "doc:write"})
        assert [d.name for d in role.permission_details] == ["doc:read", "doc:write"]
        assert role.permission_details[0].description == "Read documents"

    @pytest.mark.asyncio
    async def test_name_is_trimmed(self, role_service):
        role = await role_service.create_role("  viewer  ", ["doc:read"], description="Reads")

        assert role.name == "viewer"
        assert role.description == "Reads"

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, role_service):
        with pytest.raises(ValidationError, match="Role name is required"):
            await role_service.create_role("   ", ["doc:read"])

        assert await role_service.list_roles() == []

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, role_service):
        await role_service.create_role("Editor", ["doc:read", "doc:write"])

        with pytest.raises(ConflictError, match="Editor"):
            await role_service.create_role("Editor", [])

    @pytest.mark.asyncio
    async def test_unknown_permissions_persist_nothing(self, role_service):
        with pytest.raises(ValidationError) as exc_info:
            await role_service.create_role("Editor", ["doc:read", "bogus:perm", "nope:x"])

        assert exc_info.value.invalid_names == ["bogus:perm", "nope:x"]
        assert await role_service.list_roles() == []

    @pytest.mark.asyncio
    async def test_duplicate_permission_names_collapse(self, role_service):
        role = await role_service.create_role("Editor", ["doc:read", "doc:read"])

        assert role.permissions == frozenset({"doc:read"})

    @pytest.mark.asyncio
    async def test_unique_constraint_wins_when_precheck_misses(self, role_service):
        """A racing insert is caught by the unique constraint, not the pre-check."""
        await role_service.create_role("Editor", ["doc:read"])

        with patch.object(RoleRepository, "get_by_name", AsyncMock(return_value=None)):
            with pytest.raises(ConflictError, match="Editor"):
                await role_service.create_role("Editor", ["doc:write"])

        roles = await role_service.list_roles()
        assert len(roles) == 1
        assert roles[0].permissions == frozenset({"doc:read"})
        audit = await role_service.list_role_audit(roles[0].id)
        assert [e.action for e in audit] == [RoleAuditAction.CREATE]


class TestConcurrentCreate:
    """Two writers racing for the same role name."""

    @pytest.mark.asyncio
    async def test_exactly_one_concurrent_create_succeeds(self, tmp_path):
        settings = Settings(
            _env_file=None,
            environment="testing",
            database_url=f"sqlite+aiosqlite:///{tmp_path}/race.db",
        )
        db = DatabaseManager(settings)
        await db.create_tables()
        await seed_permissions(db, [{"name": "doc:read"}])
        service = RoleService(db)

        try:
            results = await asyncio.gather(
                service.create_role("Editor", ["doc:read"]),
                service.create_role("Editor", ["doc:read"]),
                return_exceptions=True,
            )

            created = [r for r in results if not isinstance(r, Exception)]
            conflicts = [r for r in results if isinstance(r, ConflictError)]
            assert len(created) == 1
            assert len(conflicts) == 1
            assert len(await service.list_roles()) == 1
        finally:
            await db.disconnect()


class TestReadRoles:
    """Tests for RoleService.list_roles and get_role."""

    @pytest.mark.asyncio
    async def test_list_ordered_by_name(self, role_service):
        await role_service.create_role("writer", ["doc:write"])
        await role_service.create_role("auditor", [])
        await role_service.create_role("editor", ["doc:read"])

        roles = await role_service.list_roles()

        assert [r.name for r in roles] == ["auditor", "editor", "writer"]

    @pytest.mark.asyncio
    async def test_list_is_idempotent(self, role_service):
        await role_service.create_role("editor", ["doc:read", "doc:write"])
        await role_service.create_role("viewer", ["doc:read"])

        first = await role_service.list_roles()
        second = await role_service.list_roles()

        assert first == second

    @pytest.mark.asyncio
    async def test_get_role(self, role_service):
        created = await role_service.create_role("editor", ["doc:write", "doc:read"])

        role = await role_service.get_role(created.id)

        assert role.name == "editor"
        assert [d.name for d in role.permission_details] == ["doc:read", "doc:write"]

    @pytest.mark.asyncio
    async def test_get_missing_role(self, role_service):
        with pytest.raises(NotFoundError):
            await role_service.get_role(999)

    @pytest.mark.asyncio
    async def test_datastore_failure_is_service_error(self, role_service):
        failure = OperationalError("SELECT", {}, Exception("disk I/O error"))

        with patch.object(RoleRepository, "list_all", AsyncMock(side_effect=failure)):
            with pytest.raises(ServiceError) as exc_info:
                await role_service.list_roles()

        assert "disk" not in exc_info.value.message


class TestUpdateRole:
    """Tests for RoleService.update_role."""

    @pytest.mark.asyncio
    async def test_permission_update_is_full_replace(self, role_service):
        role = await role_service.create_role("R", ["doc:read", "doc:write"])

        updated = await role_service.update_role(role.id, permission_names=["user:list"])

        assert updated.permissions == frozenset({"user:list"})
        assert (await role_service.get_role(role.id)).permissions == frozenset({"user:list"})

    @pytest.mark.asyncio
    async def test_invalid_permission_leaves_role_intact(self, role_service):
        role = await role_service.create_role("Editor", ["doc:read", "doc:write"])

        with pytest.raises(ValidationError) as exc_info:
            await role_service.update_role(role.id, permission_names=["doc:read", "bogus:perm"])

        assert exc_info.value.invalid_names == ["bogus:perm"]
        stored = await role_service.get_role(role.id)
        assert stored.permissions == frozenset({"doc:read", "doc:write"})

    @pytest.mark.asyncio
    async def test_empty_permission_list_clears(self, role_service):
        role = await role_service.create_role("Editor", ["doc:read", "doc:write"])

        updated = await role_service.update_role(role.id, permission_names=[])

        assert updated.permissions == frozenset()
        assert (await role_service.get_role(role.id)).permissions == frozenset()

    @pytest.mark.asyncio
    async def test_omitted_fields_unchanged(self, role_service):
        role = await role_service.create_role("Editor", ["doc:read"], description="Edits")

        updated = await role_service.update_role(role.id, name="  Senior Editor ")

        assert updated.name == "Senior Editor"
        assert updated.permissions == frozenset({"doc:read"})
        assert updated.description == "Edits"

    @pytest.mark.asyncio
    async def test_rename_to_existing_name_conflicts(self, role_service):
        await role_service.create_role("viewer", ["doc:read"])
        editor = await role_service.create_role("editor", ["doc:write"])

        with pytest.raises(ConflictError):
            await role_service.update_role(editor.id, name="viewer", permission_names=[])

        stored = await role_service.get_role(editor.id)
        assert stored.name == "editor"
        assert stored.permissions == frozenset({"doc:write"})

    @pytest.mark.asyncio
    async def test_rename_caught_by_unique_constraint(self, role_service):
        await role_service.create_role("viewer", ["doc:read"])
        editor = await role_service.create_role("editor", ["doc:write"])

        with patch.object(RoleRepository, "get_by_name", AsyncMock(return_value=None)):
            with pytest.raises(ConflictError, match="viewer"):
                await role_service.update_role(editor.id, name="viewer")

        assert (await role_service.get_role(editor.id)).name == "editor"

    @pytest.mark.asyncio
    async def test_constraint_violation_without_rename_is_service_error(self, role_service):
        role = await role_service.create_role("editor", ["doc:read"])
        violation = IntegrityError("INSERT", {}, Exception("constraint failed"))

        with patch.object(RoleAuditRepository, "record", AsyncMock(side_effect=violation)):
            with pytest.raises(ServiceError) as exc_info:
                await role_service.update_role(role.id, description="Changed")

        assert "None" not in exc_info.value.message
        assert (await role_service.get_role(role.id)).description is None

    @pytest.mark.asyncio
    async def test_keeping_own_name_is_not_a_conflict(self, role_service):
        role = await role_service.create_role("editor", ["doc:read"])

        updated = await role_service.update_role(role.id, name="editor", description="Same")

        assert updated.name == "editor"
        assert updated.description == "Same"

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, role_service):
        role = await role_service.create_role("editor", [])

        with pytest.raises(ValidationError):
            await role_service.update_role(role.id, name=" ")

    @pytest.mark.asyncio
    async def test_missing_role(self, role_service):
        with pytest.raises(NotFoundError):
            await role_service.update_role(404, permission_names=["doc:read"])


class TestDeleteRole:
    """Tests for RoleService.delete_role."""

    @pytest.mark.asyncio
    async def test_delete_unassigned_role(self, role_service, catalog):
        role = await role_service.create_role("temp", ["doc:read"])

        await role_service.delete_role(role.id)

        with pytest.raises(NotFoundError):
            await role_service.get_role(role.id)
        # Catalog rows are untouched
        assert "doc:read" in {p.name for p in await catalog.list_permissions()}

    @pytest.mark.asyncio
    async def test_delete_assigned_role_conflicts(self, role_service, make_principal):
        role = await role_service.create_role("Editor", ["doc:read"])
        await make_principal("p1", role.id)

        with pytest.raises(ConflictError, match="in use"):
            await role_service.delete_role(role.id)

        assert (await role_service.get_role(role.id)).name == "Editor"

    @pytest.mark.asyncio
    async def test_restrict_foreign_key_wins_when_precheck_misses(
        self, role_service, make_principal
    ):
        role = await role_service.create_role("Editor", ["doc:read"])
        await make_principal("p1", role.id)

        with patch.object(PrincipalRepository, "count_by_role", AsyncMock(return_value=0)):
            with pytest.raises(ConflictError, match="in use"):
                await role_service.delete_role(role.id)

        stored = await role_service.get_role(role.id)
        assert stored.permissions == frozenset({"doc:read"})

    @pytest.mark.asyncio
    async def test_delete_missing_role(self, role_service):
        with pytest.raises(NotFoundError):
            await role_service.delete_role(12345)


class TestRoleAudit:
    """Tests for the role audit trail."""

    @pytest.mark.asyncio
    async def test_mutations_are_recorded_with_snapshots(self, role_service):
        actor = AuthenticatedPrincipal(principal_id="admin-1")
        role = await role_service.create_role("editor", ["doc:read"], actor=actor)
        await role_service.update_role(role.id, permission_names=["doc:write"], actor=actor)
        await role_service.delete_role(role.id, actor=actor)

        entries = await role_service.list_role_audit(role.id)

        assert [e.action for e in entries] == [
            RoleAuditAction.CREATE,
            RoleAuditAction.UPDATE,
            RoleAuditAction.DELETE,
        ]
        assert all(e.actor_id == "admin-1" for e in entries)
        create, update, delete = entries
        assert create.old_values is None
        assert create.new_values == {
            "name": "editor",
            "description": None,
            "permissions": ["doc:read"],
        }
        assert update.old_values["permissions"] == ["doc:read"]
        assert update.new_values["permissions"] == ["doc:write"]
        assert delete.old_values["permissions"] == ["doc:write"]
        assert delete.new_values is None

    @pytest.mark.asyncio
    async def test_failed_mutation_leaves_no_audit_entry(self, role_service):
        role = await role_service.create_role("editor", ["doc:read"])

        with pytest.raises(ValidationError):
            await role_service.update_role(role.id, permission_names=["bogus:perm"])

        entries = await role_service.list_role_audit(role.id)
        assert [e.action for e in entries] == [RoleAuditAction.CREATE]

    @pytest.mark.asyncio
    async def test_unknown_role_has_empty_trail(self, role_service):
        assert await role_service.list_role_audit(999) == []
