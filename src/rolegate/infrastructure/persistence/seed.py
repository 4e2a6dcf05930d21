"""Seeding of the permission catalog and the reserved superadmin role.

The catalog is read-only to the authorization core; this module is the
external process that fills it. Both functions are idempotent.
"""

import json
from pathlib import Path
from typing import Any

from rolegate.core.logging import get_logger
from rolegate.domain.entities import SUPERADMIN_ROLE_NAME
from rolegate.infrastructure.persistence.database import DatabaseManager
from rolegate.infrastructure.persistence.models import PermissionModel, RoleModel
from rolegate.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
)

logger = get_logger(__name__)


def load_permission_file(path: str | Path) -> list[dict[str, Any]]:
    """Read permission definitions from a JSON file.

    The file holds a list whose items are either permission names or
    objects with ``name`` and optional ``description``.

    Args:
        path: Path to the JSON file.

    Returns:
        Normalized list of ``{"name", "description"}`` dicts.

    Raises:
        ValueError: If the file does not have the expected shape.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Permission file must contain a JSON list")

    entries = []
    for item in data:
        if isinstance(item, str):
            item = {"name": item}
        if not isinstance(item, dict) or not str(item.get("name", "")).strip():
            raise ValueError(f"Invalid permission entry: {item!r}")
        entries.append(
            {"name": str(item["name"]).strip(), "description": item.get("description")}
        )
    return entries


async def seed_permissions(db: DatabaseManager, entries: list[dict[str, Any]]) -> int:
    """Insert the permissions that are not yet in the catalog.

    Existing permissions are left untouched, so running the same seed twice
    has no further effect.

    Args:
        db: Datastore handle.
        entries: Permission definitions from ``load_permission_file``.

    Returns:
        Number of permissions inserted.
    """
    created = 0
    async with db.unit_of_work() as session:
        repo = PermissionRepository(session)
        existing = {p.name for p in await repo.list_all()}
        for entry in entries:
            if entry["name"] in existing:
                continue
            await repo.create(
                PermissionModel(name=entry["name"], description=entry.get("description"))
            )
            existing.add(entry["name"])
            created += 1
            logger.info("Seeded permission", permission=entry["name"])
    return created


async def ensure_superadmin_role(db: DatabaseManager) -> bool:
    """Create the reserved superadmin role if it does not exist.

    Args:
        db: Datastore handle.

    Returns:
        True if the role was created.
    """
    async with db.unit_of_work() as session:
        repo = RoleRepository(session)
        if await repo.get_by_name(SUPERADMIN_ROLE_NAME) is not None:
            return False
        await repo.create(
            RoleModel(name=SUPERADMIN_ROLE_NAME, description="Implicitly holds every permission")
        )
    logger.info("Seeded superadmin role", role_name=SUPERADMIN_ROLE_NAME)
    return True
