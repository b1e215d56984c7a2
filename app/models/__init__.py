"""SQLModel database models."""

from app.models.company import Branch, Company
from app.models.user import User

__all__ = [
    "User",
    "Company",
    "Branch",
]
