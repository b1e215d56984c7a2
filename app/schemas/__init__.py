"""Pydantic schemas for request/response validation."""

from app.schemas.user import (
    BranchSummary,
    CompanySummary,
    UserCreate,
    UserDetailResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserDetailResponse",
    "CompanySummary",
    "BranchSummary",
]
