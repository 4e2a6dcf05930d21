"""Authorization decision engine.

Decides whether a principal may perform an action by reading the principal's
role and the role's permissions fresh from the datastore. The decision order:

1. Unknown principal: deny (UNAUTHENTICATED).
2. Role named ``superadmin``: allow.
3. Required permission in the role's permission set: allow.
4. Otherwise: deny (FORBIDDEN).

Any failure while reading denies with SERVICE_UNAVAILABLE. The engine never
allows on error.
"""

from dataclasses import dataclass
from enum import Enum

from rolegate.core.logging import LoggingContext, get_logger
from rolegate.domain.entities import AuthenticatedPrincipal
from rolegate.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    RoleGateError,
    ServiceError,
)
from rolegate.infrastructure.persistence.database import DatabaseManager
from rolegate.infrastructure.persistence.repositories import PrincipalRepository

logger = get_logger(__name__)


class DenialReason(str, Enum):
    """Why a check was denied."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of an authorization check.

    Attributes:
        allowed: Whether the action is permitted.
        principal_id: Principal that was checked.
        permission: Permission that was required.
        reason: Why the check was denied, None when allowed.
        role_name: Stored role of the principal, if resolved.
    """

    allowed: bool
    principal_id: str
    permission: str
    reason: DenialReason | None = None
    role_name: str | None = None

    @property
    def error(self) -> RoleGateError | None:
        """The exception matching a denial, None when allowed."""
        if self.allowed:
            return None
        if self.reason == DenialReason.UNAUTHENTICATED:
            return AuthenticationError()
        if self.reason == DenialReason.FORBIDDEN:
            return AuthorizationError()
        return ServiceError()


class AuthorizationEngine:
    """Stateless allow/deny procedure backed by the role store."""

    def __init__(self, db: DatabaseManager) -> None:
        """Initialize the engine.

        Args:
            db: Datastore handle.
        """
        self.db = db

    async def authorize(
        self, principal: AuthenticatedPrincipal, permission: str
    ) -> AuthorizationDecision:
        """Check whether ``principal`` holds ``permission``.

        The permission is matched exactly and case-sensitively. The role name
        hint carried by the principal is compared with the stored role but
        never grants anything.

        Args:
            principal: Verified principal identity.
            permission: Required permission name.

        Returns:
            The decision. Denials are returned, not raised.
        """
        with LoggingContext(principal_id=principal.principal_id, permission=permission):
            return await self._decide(principal, permission)

    async def _decide(
        self, principal: AuthenticatedPrincipal, permission: str
    ) -> AuthorizationDecision:
        try:
            async with self.db.session() as session:
                grants = await PrincipalRepository(session).get_grants(principal.principal_id)
        except Exception:
            logger.error("Authorization check failed, denying", exc_info=True)
            return AuthorizationDecision(
                allowed=False,
                principal_id=principal.principal_id,
                permission=permission,
                reason=DenialReason.SERVICE_UNAVAILABLE,
            )

        if grants is None:
            logger.info("Authorization denied: unknown principal")
            return AuthorizationDecision(
                allowed=False,
                principal_id=principal.principal_id,
                permission=permission,
                reason=DenialReason.UNAUTHENTICATED,
            )

        if principal.role_name_hint is not None and principal.role_name_hint != grants.role_name:
            logger.warning(
                "Role hint does not match stored role",
                role_name_hint=principal.role_name_hint,
                role_name=grants.role_name,
            )

        if grants.grants(permission):
            logger.debug(
                "Authorization granted",
                role_name=grants.role_name,
                superadmin=grants.is_superadmin,
            )
            return AuthorizationDecision(
                allowed=True,
                principal_id=principal.principal_id,
                permission=permission,
                role_name=grants.role_name,
            )

        logger.info("Authorization denied: missing permission", role_name=grants.role_name)
        return AuthorizationDecision(
            allowed=False,
            principal_id=principal.principal_id,
            permission=permission,
            reason=DenialReason.FORBIDDEN,
            role_name=grants.role_name,
        )

    async def require(
        self, principal: AuthenticatedPrincipal, permission: str
    ) -> AuthorizationDecision:
        """Like ``authorize`` but raises on denial.

        Raises:
            AuthenticationError: If the principal is unknown.
            AuthorizationError: If the permission is not granted.
            ServiceError: If the datastore could not be read.
        """
        decision = await self.authorize(principal, permission)
        if not decision.allowed:
            raise decision.error
        return decision
