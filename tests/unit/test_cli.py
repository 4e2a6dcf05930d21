"""Tests for the rolegate CLI."""

import asyncio
import json
import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from rolegate.cli import cli
from rolegate.core.config import get_settings
from rolegate.domain.services import PermissionCatalog, RoleService
from rolegate.infrastructure.persistence.database import DatabaseManager


@pytest.fixture
def cli_env(tmp_path):
    """Point the CLI at a fresh file database."""
    env = {
        "ROLEGATE_ENVIRONMENT": "testing",
        "ROLEGATE_LOG_FORMAT": "console",
        "ROLEGATE_DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path}/cli.db",
    }
    get_settings.cache_clear()
    with patch.dict(os.environ, env):
        yield env
    get_settings.cache_clear()


def _read(coro_factory):
    async def run():
        db = DatabaseManager(get_settings())
        try:
            return await coro_factory(db)
        finally:
            await db.disconnect()

    return asyncio.run(run())


def test_info(cli_env):
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "RoleGate v" in result.output
    assert "X-Principal-Id" in result.output


def test_init_db_creates_superadmin_role(cli_env):
    result = CliRunner().invoke(cli, ["init-db", "--force"])

    assert result.exit_code == 0
    assert "Database initialized successfully." in result.output
    roles = _read(lambda db: RoleService(db).list_roles())
    assert [r.name for r in roles] == ["superadmin"]


def test_init_db_refuses_production_without_force(cli_env):
    with patch.dict(os.environ, {"ROLEGATE_ENVIRONMENT": "production"}):
        get_settings.cache_clear()
        result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1


def test_seed_permissions_is_idempotent(cli_env, tmp_path):
    seed_file = tmp_path / "permissions.json"
    seed_file.write_text(
        json.dumps([{"name": "doc:read", "description": "Read documents"}, "doc:write"])
    )
    runner = CliRunner()
    assert runner.invoke(cli, ["init-db", "--force"]).exit_code == 0

    first = runner.invoke(cli, ["seed-permissions", str(seed_file)])
    second = runner.invoke(cli, ["seed-permissions", str(seed_file)])

    assert first.exit_code == 0
    assert "Seeded 2 new permission(s), 0 already present." in first.output
    assert "Seeded 0 new permission(s), 2 already present." in second.output
    permissions = _read(lambda db: PermissionCatalog(db).list_permissions())
    assert [p.name for p in permissions] == ["doc:read", "doc:write"]


def test_seed_permissions_rejects_bad_file(cli_env, tmp_path):
    seed_file = tmp_path / "permissions.json"
    seed_file.write_text('{"not": "a list"}')

    result = CliRunner().invoke(cli, ["seed-permissions", str(seed_file)])

    assert result.exit_code == 1
