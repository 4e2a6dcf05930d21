"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rolegate.core.config import Settings
from rolegate.domain.entities import AuthenticatedPrincipal
from rolegate.domain.services import AuthorizationEngine, PermissionCatalog, RoleService
from rolegate.infrastructure.api.app import create_app
from rolegate.infrastructure.persistence.database import DatabaseManager
from rolegate.infrastructure.persistence.models import PrincipalModel
from rolegate.infrastructure.persistence.seed import seed_permissions

CATALOG = [
    {"name": "doc:read", "description": "Read documents"},
    {"name": "doc:write", "description": "Write documents"},
    {"name": "user:list", "description": "List users"},
    {"name": "role:read", "description": "View roles"},
    {"name": "role:create", "description": "Create roles"},
    {"name": "role:update", "description": "Update roles"},
    {"name": "role:delete", "description": "Delete roles"},
    {"name": "permission:read", "description": "View the permission catalog"},
]


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        log_format="console",
    )


@pytest_asyncio.fixture
async def db(test_settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """Create a database with all tables and an empty catalog."""
    manager = DatabaseManager(test_settings)
    await manager.create_tables()

    yield manager

    await manager.drop_tables()
    await manager.disconnect()


@pytest_asyncio.fixture
async def seeded_db(db: DatabaseManager) -> DatabaseManager:
    """Database whose catalog holds the CATALOG permissions."""
    await seed_permissions(db, CATALOG)
    return db


@pytest.fixture
def catalog(seeded_db: DatabaseManager) -> PermissionCatalog:
    return PermissionCatalog(seeded_db)


@pytest.fixture
def role_service(seeded_db: DatabaseManager, catalog: PermissionCatalog) -> RoleService:
    return RoleService(seeded_db, catalog)


@pytest.fixture
def authorization_engine(seeded_db: DatabaseManager) -> AuthorizationEngine:
    return AuthorizationEngine(seeded_db)


@pytest.fixture
def make_principal(seeded_db: DatabaseManager):
    """Factory inserting a principal row and returning its identity."""

    async def _make(
        principal_id: str, role_id: int | None = None, role_name_hint: str | None = None
    ) -> AuthenticatedPrincipal:
        async with seeded_db.unit_of_work() as session:
            session.add(PrincipalModel(id=principal_id, role_id=role_id))
        return AuthenticatedPrincipal(principal_id=principal_id, role_name_hint=role_name_hint)

    return _make


@pytest_asyncio.fixture
async def client(
    seeded_db: DatabaseManager, test_settings: Settings
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the seeded database."""
    app = create_app(settings=test_settings, db=seeded_db)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_headers(role_service: RoleService, make_principal) -> dict[str, str]:
    """Headers of a principal holding every role and permission management right."""
    role = await role_service.create_role(
        "role-admin",
        ["role:read", "role:create", "role:update", "role:delete", "permission:read"],
    )
    await make_principal("admin-1", role.id)
    return {"X-Principal-Id": "admin-1", "X-Principal-Role": "role-admin"}
