"""
Company and Branch database models.

Relation targets for User. They are not exposed over HTTP.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from app.models.base import timestamp_type, utcnow

if TYPE_CHECKING:
    from app.models.user import User


class Company(SQLModel, table=True):
    __tablename__ = "companies"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type(), nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type(), nullable=False,
                                 sa_column_kwargs={"onupdate": utcnow})

    branches: list["Branch"] = Relationship(back_populates="company")
    users: list["User"] = Relationship(back_populates="company")


class Branch(SQLModel, table=True):
    __tablename__ = "branches"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    company_id: Optional[int] = Field(default=None, foreign_key="companies.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type(), nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=timestamp_type(), nullable=False,
                                 sa_column_kwargs={"onupdate": utcnow})

    company: Optional[Company] = Relationship(back_populates="branches")
    users: list["User"] = Relationship(back_populates="branch")
