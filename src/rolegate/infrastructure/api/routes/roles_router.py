"""Roles API routes.

Provides endpoints for role management. Each endpoint is guarded by the
matching ``role:*`` permission.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from rolegate.core.logging import get_logger
from rolegate.domain.entities import AuthenticatedPrincipal
from rolegate.infrastructure.api.dependencies import RoleServiceDep, require_permission
from rolegate.infrastructure.api.schemas import (
    CreateRoleRequest,
    ErrorResponse,
    RoleAuditEntryResponse,
    RoleAuditListResponse,
    RoleListResponse,
    RoleResponse,
    UpdateRoleRequest,
)

logger = get_logger(__name__)

router = APIRouter()

RoleReader = Annotated[AuthenticatedPrincipal, Depends(require_permission("role:read"))]
RoleCreator = Annotated[AuthenticatedPrincipal, Depends(require_permission("role:create"))]
RoleUpdater = Annotated[AuthenticatedPrincipal, Depends(require_permission("role:update"))]
RoleDeleter = Annotated[AuthenticatedPrincipal, Depends(require_permission("role:delete"))]

_GUARD_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Principal could not be validated"},
    403: {"model": ErrorResponse, "description": "Permission denied"},
}


@router.get("", response_model=RoleListResponse, responses=_GUARD_RESPONSES)
async def list_roles(principal: RoleReader, service: RoleServiceDep) -> RoleListResponse:
    """List all roles ordered by name, with permission descriptions."""
    roles = await service.list_roles()

    logger.debug("Roles listed", count=len(roles), requested_by=principal.principal_id)

    return RoleListResponse(items=[RoleResponse.from_entity(r) for r in roles], total=len(roles))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RoleResponse,
    responses={
        **_GUARD_RESPONSES,
        400: {"model": ErrorResponse, "description": "Blank name or unknown permissions"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def create_role(
    role_request: CreateRoleRequest,
    principal: RoleCreator,
    service: RoleServiceDep,
) -> RoleResponse:
    """Create a new role.

    Args:
        role_request: Role creation request.
        principal: Principal holding ``role:create``.
        service: Role service.

    Returns:
        Created role.
    """
    role = await service.create_role(
        role_request.name,
        role_request.permissions,
        description=role_request.description,
        actor=principal,
    )
    return RoleResponse.from_entity(role)


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    responses={**_GUARD_RESPONSES, 404: {"model": ErrorResponse, "description": "Role not found"}},
)
async def get_role(role_id: int, principal: RoleReader, service: RoleServiceDep) -> RoleResponse:
    """Get a role by ID."""
    return RoleResponse.from_entity(await service.get_role(role_id))


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    responses={
        **_GUARD_RESPONSES,
        400: {"model": ErrorResponse, "description": "Blank name or unknown permissions"},
        404: {"model": ErrorResponse, "description": "Role not found"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def update_role(
    role_id: int,
    role_request: UpdateRoleRequest,
    principal: RoleUpdater,
    service: RoleServiceDep,
) -> RoleResponse:
    """Update a role.

    A provided ``permissions`` list replaces the whole permission set.

    Args:
        role_id: Role ID.
        role_request: Fields to change.
        principal: Principal holding ``role:update``.
        service: Role service.

    Returns:
        Updated role.
    """
    role = await service.update_role(
        role_id,
        name=role_request.name,
        permission_names=role_request.permissions,
        description=role_request.description,
        actor=principal,
    )
    return RoleResponse.from_entity(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        **_GUARD_RESPONSES,
        404: {"model": ErrorResponse, "description": "Role not found"},
        409: {"model": ErrorResponse, "description": "Role is assigned to principals"},
    },
)
async def delete_role(role_id: int, principal: RoleDeleter, service: RoleServiceDep) -> Response:
    """Delete a role that no principal is assigned to."""
    await service.delete_role(role_id, actor=principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{role_id}/audit", response_model=RoleAuditListResponse, responses=_GUARD_RESPONSES)
async def list_role_audit(
    role_id: int, principal: RoleReader, service: RoleServiceDep
) -> RoleAuditListResponse:
    """List the recorded changes of a role, oldest first."""
    entries = await service.list_role_audit(role_id)
    return RoleAuditListResponse(
        items=[RoleAuditEntryResponse.from_entity(e) for e in entries], total=len(entries)
    )
