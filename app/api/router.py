"""
API router.

Aggregates all endpoints.
"""

from fastapi import APIRouter

from app.api.endpoints import users

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
