"""Permission entity.

A permission is a namespaced capability identifier such as ``doc:read``.
Permissions are seeded outside the core and are read-only at runtime.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Permission:
    """Permission entity.

    Attributes:
        id: Surrogate key.
        name: Unique capability identifier (case-sensitive).
        description: Optional human-readable description.
    """

    id: int
    name: str
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate permission data after initialization."""
        if not self.name:
            raise ValueError("Permission name is required")
