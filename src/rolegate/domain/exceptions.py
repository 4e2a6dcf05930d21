"""Error taxonomy for the authorization core.

Validation, conflict and not-found errors are expected outcomes surfaced to
the caller with detail. Authentication and authorization errors describe a
denial. ServiceError wraps datastore failures and carries no internal detail.
"""

from collections.abc import Iterable


class RoleGateError(Exception):
    """Base class for all RoleGate errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(RoleGateError):
    """Raised for malformed input: blank role name or unknown permission names."""

    def __init__(self, message: str, invalid_names: Iterable[str] = ()) -> None:
        self.invalid_names = sorted(set(invalid_names))
        super().__init__(message)

    @classmethod
    def unknown_permissions(cls, names: Iterable[str]) -> "ValidationError":
        invalid = sorted(set(names))
        return cls(f"Invalid permission(s): {', '.join(invalid)}", invalid_names=invalid)


class ConflictError(RoleGateError):
    """Raised when a role name is taken or a role is still assigned."""


class NotFoundError(RoleGateError):
    """Raised when a role or permission does not exist."""


class AuthenticationError(RoleGateError):
    """Raised when the principal cannot be established."""

    def __init__(self, message: str = "Could not validate principal") -> None:
        super().__init__(message)


class AuthorizationError(RoleGateError):
    """Raised when the principal lacks the required permission."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)


class ServiceError(RoleGateError):
    """Raised when the datastore or transaction machinery fails."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message)
