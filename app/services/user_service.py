"""
User service.

One method per CRUD operation. Each validates its input, makes exactly one
call to the data store and returns the stored record. Store errors
(NotFoundError, ConflictError, UnknownStoreError) propagate unchanged.
"""

import logging
from typing import Any, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError, format_validation_errors
from app.db.repositories.base import UserStore
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, repository: UserStore):
        """
        Initialize service with its data-access collaborator.

        Args:
            repository: UserStore implementation
        """
        self.repository = repository

    def create(self, user_data: Union[UserCreate, Mapping[str, Any]]) -> User:
        """
        Create a new user.

        Args:
            user_data: Create shape, as a schema or a raw mapping

        Returns:
            Created user

        Raises:
            ValidationError: If the input is malformed (no store access happens)
            ConflictError: If the email already exists
        """
        data = self._validate(UserCreate, user_data)
        user = self.repository.create(data.model_dump())
        logger.info("Created user %s", user.id, extra={"user_id": user.id})
        return user

    def list_all(self) -> list[User]:
        """Get every user, with company and branch."""
        users = self.repository.find_many()
        logger.debug("Listed %d users", len(users))
        return users

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Get user by ID.

        Returns:
            User if found, None otherwise
        """
        return self.repository.find_by_id(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email.

        Returns:
            User if found, None otherwise
        """
        return self.repository.find_by_email(email)

    def update(self, user_id: int, user_data: Union[UserUpdate, Mapping[str, Any]]) -> User:
        """
        Apply a partial update.

        Only fields present in ``user_data`` are written.

        Raises:
            ValidationError: If the input is malformed (no store access happens)
            NotFoundError: If no user has this id
            ConflictError: If the new email already exists
        """
        patch = self._validate(UserUpdate, user_data).to_patch()
        user = self.repository.update(user_id, patch)
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(patch)) or "no fields",
                    extra={"user_id": user_id})
        return user

    def delete(self, user_id: int) -> User:
        """
        Delete a user.

        Returns:
            The user as it was before deletion

        Raises:
            NotFoundError: If no user has this id
        """
        user = self.repository.delete(user_id)
        logger.info("Deleted user %s", user_id, extra={"user_id": user_id})
        return user

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(schema: type[SchemaT], data: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError("Invalid user data", details=format_validation_errors(e.errors())) from e
