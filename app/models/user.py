"""
User database model.

Defines the users table and its optional links to a company and a branch.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from app.models.base import timestamp_type, utcnow

if TYPE_CHECKING:
    from app.models.company import Branch, Company


class User(SQLModel, table=True):
    """
    User record.

    ``id`` is assigned by the database on insert and never changes.
    Email uniqueness is enforced by the unique index, not by application code.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    name: str = Field(max_length=255, nullable=False)
    # Stored as given, see DESIGN.md
    password: str = Field(nullable=False)

    # Relations
    company_id: Optional[int] = Field(default=None, foreign_key="companies.id", index=True)
    branch_id: Optional[int] = Field(default=None, foreign_key="branches.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type(), nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type(), nullable=False,
                                 sa_column_kwargs={"onupdate": utcnow})

    company: Optional["Company"] = Relationship(back_populates="users")
    branch: Optional["Branch"] = Relationship(back_populates="users")
