"""Database repositories."""

from app.db.repositories.base import UserStore
from app.db.repositories.user import UserRepository

__all__ = [
    "UserStore",
    "UserRepository",
]
