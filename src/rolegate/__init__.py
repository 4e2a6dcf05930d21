"""RoleGate - Role-based authorization core.

Roles, permissions and the request-time allow/deny decision, with an
optional FastAPI adapter and CLI.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
