"""FastAPI dependencies for principal resolution and authorization.

Principals authenticate outside this service. A principal resolver turns an
incoming request into an ``AuthenticatedPrincipal``; the default resolver
trusts identity headers set by an upstream gateway. Routes are guarded with
``require_permission``, which asks the decision engine on every request.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from rolegate.core.logging import get_logger
from rolegate.domain.entities import AuthenticatedPrincipal
from rolegate.domain.exceptions import AuthenticationError
from rolegate.domain.services import AuthorizationEngine, PermissionCatalog, RoleService

logger = get_logger(__name__)

PrincipalResolver = Callable[[Request], Awaitable[AuthenticatedPrincipal | None]]


class HeaderPrincipalResolver:
    """Reads the principal identity from trusted gateway headers.

    Only deploy behind a gateway that strips these headers from client
    requests and sets them after verifying the credential.
    """

    def __init__(self, id_header: str, role_header: str) -> None:
        """Initialize the resolver.

        Args:
            id_header: Header carrying the principal ID.
            role_header: Header carrying the role name claimed by the token.
        """
        self.id_header = id_header
        self.role_header = role_header

    async def __call__(self, request: Request) -> AuthenticatedPrincipal | None:
        principal_id = (request.headers.get(self.id_header) or "").strip()
        if not principal_id:
            return None
        role_hint = request.headers.get(self.role_header) or None
        return AuthenticatedPrincipal(principal_id=principal_id, role_name_hint=role_hint)


def get_role_service(request: Request) -> RoleService:
    return request.app.state.role_service


def get_permission_catalog(request: Request) -> PermissionCatalog:
    return request.app.state.permission_catalog


def get_authorization_engine(request: Request) -> AuthorizationEngine:
    return request.app.state.authorization_engine


async def get_authenticated_principal(request: Request) -> AuthenticatedPrincipal:
    """Resolve the principal making the request.

    Args:
        request: Incoming request.

    Returns:
        The verified principal identity.

    Raises:
        AuthenticationError: If the resolver finds no principal.
    """
    resolver: PrincipalResolver = request.app.state.principal_resolver
    principal = await resolver(request)
    if principal is None:
        logger.info("Request without principal identity", path=request.url.path)
        raise AuthenticationError()
    return principal


# Type aliases for dependency injection
CurrentPrincipal = Annotated[AuthenticatedPrincipal, Depends(get_authenticated_principal)]
RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]
PermissionCatalogDep = Annotated[PermissionCatalog, Depends(get_permission_catalog)]
AuthorizationEngineDep = Annotated[AuthorizationEngine, Depends(get_authorization_engine)]


def require_permission(permission: str) -> Callable[..., Awaitable[AuthenticatedPrincipal]]:
    """Build a dependency that admits only principals holding ``permission``.

    Args:
        permission: Required permission name.

    Returns:
        Dependency returning the authorized principal. Denials surface as
        ``AuthenticationError``, ``AuthorizationError`` or ``ServiceError``.
    """

    async def dependency(
        principal: CurrentPrincipal, engine: AuthorizationEngineDep
    ) -> AuthenticatedPrincipal:
        await engine.require(principal, permission)
        return principal

    return dependency
