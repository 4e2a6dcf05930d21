"""API Routes for RoleGate."""

from .permissions_router import router as permissions_router
from .roles_router import router as roles_router

__all__ = [
    "permissions_router",
    "roles_router",
]
