"""User model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    TIMESTAMP,
    Column,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    User account model.

    Owns at most one Profile; the link lives on ``profiles.user_id`` and is
    resolved through the repository rather than an ORM relationship.
    """

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)
