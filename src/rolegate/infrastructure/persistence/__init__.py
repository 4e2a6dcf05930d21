"""Persistence layer: SQLAlchemy models, repositories and the datastore handle."""

from rolegate.infrastructure.persistence.database import Base, DatabaseManager

__all__ = ["Base", "DatabaseManager"]
