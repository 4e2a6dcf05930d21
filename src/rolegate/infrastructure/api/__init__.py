"""HTTP adapter for RoleGate."""
