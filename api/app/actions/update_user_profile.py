"""User update action."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import transaction
from app.models.user import User
from app.repositories.users import update_user

logger = logging.getLogger(__name__)


class UpdateUserProfile:
    """
    Update a user's account fields.

    Only columns of the users table (name, email) are written. Other keys
    in the payload, such as ``bio``, are ignored and the profile row is left
    untouched.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def handle(self, user: User, data: dict[str, Any]) -> User:
        async with transaction(self.db):
            await update_user(self.db, user, data)

        await self.db.refresh(user)

        logger.info("Updated user %s (fields: %s)", user.id, ", ".join(sorted(data)))
        return user
