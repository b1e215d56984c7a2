"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.company import Branch, Company  # noqa: F401
from app.models.user import User  # noqa: F401
