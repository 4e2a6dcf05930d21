"""Audit entry for role mutations."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class RoleAuditAction(str, Enum):
    """Kinds of recorded role mutations."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RoleAuditEntry:
    """A committed change to a role.

    Attributes:
        id: Sequence number.
        action: Mutation kind.
        role_id: Role that was changed (kept after the role is deleted).
        actor_id: Principal that performed the change, if known.
        old_values: Snapshot before the change (None for CREATE).
        new_values: Snapshot after the change (None for DELETE).
        occurred_at: When the change was committed.
    """

    id: int
    action: RoleAuditAction
    role_id: int
    actor_id: str | None = None
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    occurred_at: datetime | None = None
