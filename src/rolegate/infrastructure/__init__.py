"""Infrastructure layer - External dependencies and implementations.

This layer contains all external dependencies including:
- Database adapters (SQLAlchemy)
- API routes (FastAPI)

The infrastructure layer implements the storage and transport for the
domain services.
"""
