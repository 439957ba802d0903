"""Infrastructure layer - External dependencies and implementations.

This layer contains all external dependencies including:
- Database adapters (SQLAlchemy)
- API routes (FastAPI)
- Authentication (JWT)
- Payment provider webhooks

The infrastructure layer implements the collaborators the application
services depend on.
"""

from hospeda.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "init_database",
]
