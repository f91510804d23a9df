"""Profile model for user bio and location."""

import uuid

from sqlalchemy import (
    TIMESTAMP,
    Column,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

from app.database import Base
from app.models.user import utcnow


class Profile(Base):
    """
    User profile content.

    Exactly one profile per user: ``user_id`` is unique, and deleting the
    user cascades to the profile.
    """

    __tablename__ = "profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    bio = Column(Text)
    location = Column(String)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (UniqueConstraint("user_id", name="uq_profiles_user_id"),)
