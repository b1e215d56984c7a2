"""
User repository.

Handles database operations for User model and translates SQLAlchemy
failures into the application's error types.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from app.core.errors import ConflictError, NotFoundError, UnknownStoreError
from app.db.repositories.base import UserStore
from app.models.base import MAX_ID
from app.models.user import User

logger = logging.getLogger(__name__)


class UserRepository(UserStore):
    """Repository for User database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def find_many(self) -> list[User]:
        """
        Get all users.

        Returns:
            List of users with company and branch loaded
        """
        statement = select(User).options(*self._relations()).order_by(User.id)
        with self._translate_errors("select"):
            return list(self.session.exec(statement).all())

    def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User instance if found, None otherwise
        """
        if not self._storable_id(user_id):
            return None
        statement = select(User).where(User.id == user_id).options(*self._relations())
        with self._translate_errors("select"):
            return self.session.exec(statement).first()

    def find_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: User email

        Returns:
            User instance if found, None otherwise
        """
        statement = select(User).where(User.email == email).options(*self._relations())
        with self._translate_errors("select"):
            return self.session.exec(statement).first()

    def create(self, data: dict[str, Any]) -> User:
        """
        Create a new user in the database.

        Args:
            data: Column values keyed by model attribute name

        Returns:
            Created user with generated id

        Raises:
            ConflictError: If the email is taken or a foreign key is rejected
        """
        user = User(**data)
        with self._translate_errors("insert"):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def update(self, user_id: int, patch: dict[str, Any]) -> User:
        """
        Update an existing user.

        Args:
            user_id: User ID
            patch: Only the attributes to change

        Returns:
            Updated user

        Raises:
            NotFoundError: If no user has this id
            ConflictError: If the new email is taken or a foreign key is rejected
        """
        with self._translate_errors("update"):
            user = self.session.get(User, user_id) if self._storable_id(user_id) else None
            if user is None:
                raise NotFoundError("User", user_id)
            for key, value in patch.items():
                setattr(user, key, value)
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def delete(self, user_id: int) -> User:
        """
        Delete a user by ID.

        Args:
            user_id: User ID to delete

        Returns:
            The deleted user as it was before removal

        Raises:
            NotFoundError: If no user has this id
        """
        with self._translate_errors("delete"):
            user = self.session.get(User, user_id) if self._storable_id(user_id) else None
            if user is None:
                raise NotFoundError("User", user_id)
            self.session.delete(user)
            self.session.commit()
        return user

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _storable_id(user_id: int) -> bool:
        # Ids outside the column range cannot exist and would overflow the driver
        return 1 <= user_id <= MAX_ID

    @staticmethod
    def _relations() -> tuple:
        return selectinload(User.company), selectinload(User.branch)

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Roll back and re-raise store failures as application errors."""
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("User %s rejected by constraint: %s", operation, e.orig)
            raise ConflictError("User violates a uniqueness or foreign key constraint") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User %s failed: %s", operation, e)
            raise UnknownStoreError(str(e.__class__.__name__), operation) from e
