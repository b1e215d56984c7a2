"""
Abstract data-access contract for users.

The service layer depends on this interface only. ``UserRepository`` is the
relational implementation; tests may substitute an in-memory one.

Implementations must:

- return ``None`` from the ``find_*`` methods when nothing matches
- raise ``NotFoundError`` from ``update``/``delete`` for an unknown id
- raise ``ConflictError`` when a store constraint rejects a write
- raise ``UnknownStoreError`` for any other store failure
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from app.models.user import User


class UserStore(ABC):
    """Data-access operations for User records."""

    @abstractmethod
    def find_many(self) -> list[User]:
        """All users, with company and branch loaded."""

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        """Single user by primary key, with company and branch loaded."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Single user by unique email, with company and branch loaded."""

    @abstractmethod
    def create(self, data: dict[str, Any]) -> User:
        """Insert a user built from ``data`` and return it with its new id."""

    @abstractmethod
    def update(self, user_id: int, patch: dict[str, Any]) -> User:
        """Apply ``patch`` to the user. Keys absent from ``patch`` are untouched."""

    @abstractmethod
    def delete(self, user_id: int) -> User:
        """Remove the user and return its pre-deletion state."""
