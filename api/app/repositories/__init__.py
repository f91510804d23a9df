"""Repository query functions."""

from app.repositories.users import (
    email_in_use,
    find_profile_by_user_id,
    find_user_by_email,
    find_user_by_id,
    insert_profile,
    insert_user,
    update_user,
)

__all__ = [
    "email_in_use",
    "find_profile_by_user_id",
    "find_user_by_email",
    "find_user_by_id",
    "insert_profile",
    "insert_user",
    "update_user",
]
