"""Pydantic schemas for request/response validation."""

from app.schemas.users import (
    CreateUserRequest,
    CreateUserResponse,
    ProfileData,
    ProfileResponse,
    UpdateUserRequest,
    UpdateUserResponse,
    UserResponse,
)

__all__ = [
    "CreateUserRequest",
    "CreateUserResponse",
    "ProfileData",
    "ProfileResponse",
    "UpdateUserRequest",
    "UpdateUserResponse",
    "UserResponse",
]
