"""Profile creation action."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import Profile
from app.models.user import User
from app.repositories.users import insert_profile

logger = logging.getLogger(__name__)


class CreateProfileAction:
    """Insert the profile row for an existing user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def handle(self, user: User, profile_data: dict[str, Any]) -> Profile:
        """
        Create one profile referencing ``user``.

        Input is trusted: validation happens before the action runs. There
        is no commit here - the caller's transaction owns this write.
        """
        profile = await insert_profile(
            self.db,
            user_id=user.id,
            bio=profile_data["bio"],
            location=profile_data["location"],
        )
        logger.debug("Inserted profile %s for user %s", profile.id, user.id)
        return profile
