"""Permissions API routes.

The catalog is read-only over HTTP; permissions are seeded with the
``seed-permissions`` command.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from rolegate.domain.entities import AuthenticatedPrincipal
from rolegate.infrastructure.api.dependencies import PermissionCatalogDep, require_permission
from rolegate.infrastructure.api.schemas import (
    ErrorResponse,
    PermissionListResponse,
    PermissionResponse,
)

router = APIRouter()


@router.get(
    "",
    response_model=PermissionListResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Principal could not be validated"},
        403: {"model": ErrorResponse, "description": "Permission denied"},
    },
)
async def list_permissions(
    principal: Annotated[AuthenticatedPrincipal, Depends(require_permission("permission:read"))],
    catalog: PermissionCatalogDep,
) -> PermissionListResponse:
    """List every permission in the catalog, ordered by name."""
    permissions = await catalog.list_permissions()
    return PermissionListResponse(
        items=[PermissionResponse.from_entity(p) for p in permissions],
        total=len(permissions),
    )
