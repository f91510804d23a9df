"""Query functions for users and their profiles.

Inserts flush so that generated identities are available to the rest of the
unit of work, but never commit: committing belongs to the caller's
transaction.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import Profile
from app.models.user import User, utcnow

# Columns a caller may change through update_user
USER_UPDATABLE_FIELDS = ("name", "email")


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def find_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(
        select(User).where(func.lower(User.email) == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def email_in_use(
    db: AsyncSession,
    email: str,
    exclude_user_id: UUID | None = None,
) -> bool:
    """Return True if another user already holds ``email`` (case-insensitive)."""
    query = select(User.id).where(func.lower(User.email) == normalize_email(email))
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def insert_user(db: AsyncSession, name: str, email: str, password_hash: str) -> User:
    user = User(
        name=name,
        email=normalize_email(email),
        password_hash=password_hash,
    )
    db.add(user)
    await db.flush()  # Get user.id
    return user


async def insert_profile(
    db: AsyncSession,
    user_id: UUID,
    bio: str | None,
    location: str | None,
) -> Profile:
    profile = Profile(user_id=user_id, bio=bio, location=location)
    db.add(profile)
    await db.flush()
    return profile


async def find_profile_by_user_id(db: AsyncSession, user_id: UUID) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def update_user(db: AsyncSession, user: User, fields: dict[str, Any]) -> User:
    """
    Write every provided updatable field onto ``user``.

    Keys outside USER_UPDATABLE_FIELDS are ignored. A provided value equal
    to the stored one is still written, and ``updated_at`` is always stamped.
    """
    for key in USER_UPDATABLE_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if key == "email":
            value = normalize_email(value)
        setattr(user, key, value)

    user.updated_at = utcnow()
    await db.flush()
    return user
