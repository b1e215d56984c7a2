"""
User endpoints.

CRUD over the users resource.
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_user_service
from app.core.errors import NotFoundError
from app.schemas.user import UserCreate, UserDetailResponse, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.get("", summary="List all users.", response_model=list[UserDetailResponse])
def list_users(service: UserService = Depends(get_user_service)):
    """Every user with its company and branch expanded."""
    return [UserDetailResponse.model_validate(user) for user in service.list_all()]


@router.get("/lookup", summary="Get a user by email.", response_model=UserDetailResponse)
def get_user_by_email(email: str = Query(..., description="Email to look up (exact match)"),
                      service: UserService = Depends(get_user_service)):
    user = service.get_by_email(email)
    if user is None:
        raise NotFoundError("User", email)
    return UserDetailResponse.model_validate(user)


@router.get("/{user_id}", summary="Get a user by id.", response_model=UserDetailResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    user = service.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return UserDetailResponse.model_validate(user)


@router.post("",
             summary="Create a user.",
             response_model=UserResponse,
             status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, service: UserService = Depends(get_user_service)):
    """
    Create a new user.

    Raises:
        400: If the body is invalid
        409: If the email is already registered
    """
    return UserResponse.model_validate(service.create(user_data))


@router.put("/{user_id}", summary="Update a user.", response_model=UserResponse)
def update_user(user_id: int, user_data: UserUpdate, service: UserService = Depends(get_user_service)):
    """Partial update: fields missing from the body keep their stored value."""
    return UserResponse.model_validate(service.update(user_id, user_data))


@router.delete("/{user_id}", summary="Delete a user.", response_model=UserResponse)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Returns the deleted user."""
    return UserResponse.model_validate(service.delete(user_id))
