"""User-related Pydantic schemas."""

from pydantic import BaseModel, EmailStr, field_validator


def _require_text(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Field is required")
    return v.strip()


class ProfileData(BaseModel):
    """Nested profile fields supplied at user creation."""

    bio: str
    location: str

    @field_validator("bio", "location")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return _require_text(v)


class CreateUserRequest(BaseModel):
    """Request to create a user together with its profile."""

    name: str
    email: EmailStr
    password: str
    profile_data: ProfileData

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Name must contain non-whitespace characters."""
        return _require_text(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        # Not stripped: whitespace is significant in a password
        if not v:
            raise ValueError("Field is required")
        return v


class UpdateUserRequest(BaseModel):
    """Request to update a user's account fields."""

    name: str
    email: EmailStr
    bio: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_text(v)


class UserResponse(BaseModel):
    """User representation (never includes the password hash)."""

    id: str
    name: str
    email: str
    created_at: str | None
    updated_at: str | None


class ProfileResponse(BaseModel):
    """Profile representation."""

    id: str
    user_id: str
    bio: str | None
    location: str | None
    created_at: str | None
    updated_at: str | None


class CreateUserResponse(BaseModel):
    """Response after creating a user and profile."""

    user: UserResponse
    profile: ProfileResponse
    message: str


class UpdateUserResponse(BaseModel):
    """Response after updating a user."""

    user: UserResponse
    message: str
