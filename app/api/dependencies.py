"""
Shared API dependencies.

Reusable FastAPI dependencies for database access and services.
"""

from fastapi import Depends
from sqlmodel import Session

from app.db.repositories.user import UserRepository
from app.db.session import get_db
from app.services.user_service import UserService


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Build a UserService over the request's database session."""
    return UserService(UserRepository(db))
