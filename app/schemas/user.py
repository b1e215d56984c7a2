"""
User API schemas.

Pydantic models for user-related request/response validation.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from app.models.base import MAX_ID


def check_email(value: str) -> str:
    """Reject malformed addresses but keep the value exactly as sent."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return value


Email = Annotated[str, Field(max_length=255, json_schema_extra={"format": "email"}), AfterValidator(check_email)]
RecordId = Annotated[StrictInt, Field(ge=1, le=MAX_ID)]


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase on input, emits camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Request schemas
class UserCreate(CamelModel):
    """Schema for creating a user."""
    email: Email = Field(..., description="User email address")
    name: str = Field(..., min_length=1, max_length=255, description="User full name")
    password: str = Field(..., min_length=1, description="User password")
    company_id: Optional[RecordId] = Field(None, description="Company ID")
    branch_id: Optional[RecordId] = Field(None, description="Branch ID")


class UserUpdate(CamelModel):
    """
    Schema for a partial user update.

    Only keys present in the request are applied. ``companyId``/``branchId``
    may be set to null to clear the relation; the other fields may not.
    """
    email: Optional[Email] = Field(None, description="User email address")
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="User full name")
    password: Optional[str] = Field(None, min_length=1, description="User password")
    company_id: Optional[RecordId] = Field(None, description="Company ID")
    branch_id: Optional[RecordId] = Field(None, description="Branch ID")

    @field_validator("email", "name", "password", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value

    def to_patch(self) -> dict[str, Any]:
        """Attribute name -> new value, for explicitly supplied fields only."""
        return self.model_dump(exclude_unset=True)


# Response schemas
class CompanySummary(CamelModel):
    id: int
    name: str


class BranchSummary(CamelModel):
    id: int
    name: str
    company_id: Optional[int] = None


class UserResponse(CamelModel):
    """Schema for user data in API responses (no password)."""
    id: int
    email: str
    name: str
    company_id: Optional[int] = None
    branch_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class UserDetailResponse(UserResponse):
    """User with its company and branch expanded."""
    company: Optional[CompanySummary] = None
    branch: Optional[BranchSummary] = None
