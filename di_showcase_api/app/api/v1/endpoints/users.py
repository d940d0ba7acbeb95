"""
User endpoints for API v1.

Registration touches the database, the email service and the logger,
but the route only asks for ``RegistrationService``.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from di_showcase_api.app.core.dependencies import Inject
from di_showcase_api.app.core.wiring import RequestScope
from di_showcase_api.app.schemas.user import RegistrationRead, UserCreate, UserRead
from di_showcase_api.app.services.registration_service import DuplicateUserError, RegistrationService


router = APIRouter()


@router.post("/", response_model=RegistrationRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: UserCreate,
    registration: RegistrationService = Inject(RequestScope.registration_service),
) -> RegistrationRead:
    """Register a new user and send the welcome email.

    Returns 409 if the email address is already registered.
    """
    try:
        return await registration.register(user)
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/", response_model=List[UserRead])
async def list_users(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    registration: RegistrationService = Inject(RequestScope.registration_service),
) -> List[UserRead]:
    return await registration.list_users(limit=limit, offset=offset)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int, registration: RegistrationService = Inject(RequestScope.registration_service)) -> UserRead:
    user = await registration.get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
