"""User creation action."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.create_profile import CreateProfileAction
from app.auth.password import hash_password
from app.database import transaction
from app.models.profile import Profile
from app.models.user import User
from app.repositories.users import insert_user

logger = logging.getLogger(__name__)


@dataclass
class CreateUserResult:
    """The rows written by CreateUserAction."""

    user: User
    profile: Profile


class CreateUserAction:
    """Create a user together with its profile in a single transaction."""

    def __init__(self, db: AsyncSession, profile_action: CreateProfileAction | None = None):
        self.db = db
        self.profile_action = profile_action or CreateProfileAction(db)

    async def handle(self, data: dict[str, Any]) -> CreateUserResult:
        """
        Insert the user, then its profile, atomically.

        Args:
            data: name, email, plaintext password and a nested
                ``profile_data`` map with bio and location.

        If either insert fails nothing is persisted and the error propagates.
        """
        async with transaction(self.db):
            user = await insert_user(
                self.db,
                name=data["name"],
                email=data["email"],
                password_hash=hash_password(data["password"]),
            )
            profile = await self.profile_action.handle(user, data["profile_data"])

        await self.db.refresh(user)
        await self.db.refresh(profile)

        logger.info("Created user %s with profile %s", user.id, profile.id)
        return CreateUserResult(user=user, profile=profile)
