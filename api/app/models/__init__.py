"""Database models for the profiles API."""

from app.models.profile import Profile
from app.models.user import User

__all__ = [
    "User",
    "Profile",
]
