"""Users router: create and update users with their profiles."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions import CreateUserAction, UpdateUserProfile
from app.config import settings
from app.database import get_db
from app.middleware.rate_limit import limiter
from app.models.profile import Profile
from app.models.user import User
from app.repositories.users import find_user_by_id
from app.schemas.users import (
    CreateUserRequest,
    CreateUserResponse,
    ProfileResponse,
    UpdateUserRequest,
    UpdateUserResponse,
    UserResponse,
)
from app.validation import raise_for_errors, validate_create_user, validate_update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["Users"])

CREATED_MESSAGE = "User and profile created successfully"
UPDATED_MESSAGE = "Profile updated successfully"


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        created_at=user.created_at.isoformat() if user.created_at else None,
        updated_at=user.updated_at.isoformat() if user.updated_at else None,
    )


def _profile_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=str(profile.id),
        user_id=str(profile.user_id),
        bio=profile.bio,
        location=profile.location,
        created_at=profile.created_at.isoformat() if profile.created_at else None,
        updated_at=profile.updated_at.isoformat() if profile.updated_at else None,
    )


def _conflict() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "error": {
                "code": "CONFLICT",
                "message": "The email has already been taken.",
            }
        },
    )


def _not_implemented(operation: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        detail={
            "error": {
                "code": "NOT_IMPLEMENTED",
                "message": f"{operation} is not implemented",
            }
        },
    )


@router.get("", status_code=status.HTTP_501_NOT_IMPLEMENTED)
async def list_users() -> None:
    """List users. Not implemented."""
    raise _not_implemented("Listing users")


@router.post(
    "",
    response_model=CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.create_user_rate_limit)
async def create_user(
    request: Request,
    data: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
) -> CreateUserResponse:
    """
    Create a user and its profile.

    Both rows are written in one transaction; if either fails, neither
    persists.
    """
    raise_for_errors(await validate_create_user(db, data))

    try:
        result = await CreateUserAction(db).handle(data.model_dump())
    except IntegrityError:
        # Lost a race with a concurrent insert of the same email
        logger.warning("Integrity error creating user with email %s", data.email)
        raise _conflict()

    return CreateUserResponse(
        user=_user_response(result.user),
        profile=_profile_response(result.profile),
        message=CREATED_MESSAGE,
    )


@router.get("/{user_id}", status_code=status.HTTP_501_NOT_IMPLEMENTED)
async def get_user(user_id: UUID) -> None:
    """Get a single user. Not implemented."""
    raise _not_implemented("Fetching a user")


@router.put(
    "/{user_id}",
    response_model=UpdateUserResponse,
    status_code=status.HTTP_200_OK,
)
@router.patch(
    "/{user_id}",
    response_model=UpdateUserResponse,
    status_code=status.HTTP_200_OK,
)
async def update_user(
    user_id: UUID,
    data: UpdateUserRequest,
    db: AsyncSession = Depends(get_db),
) -> UpdateUserResponse:
    """
    Update a user's name and email.

    ``bio`` is accepted but only users-table columns are written; the
    profile row is not modified.
    """
    user = await find_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": {
                    "code": "NOT_FOUND",
                    "message": f"User '{user_id}' not found",
                }
            },
        )

    raise_for_errors(await validate_update_user(db, user, data))

    try:
        user = await UpdateUserProfile(db).handle(user, data.model_dump())
    except IntegrityError:
        logger.warning("Integrity error updating user %s", user_id)
        raise _conflict()

    return UpdateUserResponse(user=_user_response(user), message=UPDATED_MESSAGE)


@router.delete("/{user_id}", status_code=status.HTTP_501_NOT_IMPLEMENTED)
async def delete_user(user_id: UUID) -> None:
    """Delete a user. Not implemented."""
    raise _not_implemented("Deleting a user")
