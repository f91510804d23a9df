"""Business actions: one class per write operation."""

from app.actions.create_profile import CreateProfileAction
from app.actions.create_user import CreateUserAction, CreateUserResult
from app.actions.update_user_profile import UpdateUserProfile

__all__ = [
    "CreateProfileAction",
    "CreateUserAction",
    "CreateUserResult",
    "UpdateUserProfile",
]
