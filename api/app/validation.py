"""Request validation rules that need the database.

Shape checks (required fields, email syntax) live on the Pydantic request
schemas. The rules here run after those, before any action touches the
database, and report failures as field-level errors.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.users import email_in_use
from app.schemas.users import CreateUserRequest, UpdateUserRequest

EMAIL_TAKEN_MESSAGE = "The email has already been taken."


@dataclass(frozen=True)
class FieldError:
    """A single validation failure attached to a request field."""

    field: str
    message: str
    type: str = "value_error"

    def as_detail(self) -> dict[str, Any]:
        """Render in the same shape as Pydantic error details."""
        return {
            "loc": ["body", *self.field.split(".")],
            "msg": self.message,
            "type": self.type,
        }


class FieldValidationError(Exception):
    """Raised when one or more request fields fail validation."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


async def validate_create_user(db: AsyncSession, data: CreateUserRequest) -> list[FieldError]:
    errors: list[FieldError] = []
    if await email_in_use(db, data.email):
        errors.append(FieldError("email", EMAIL_TAKEN_MESSAGE, "unique"))
    return errors


async def validate_update_user(
    db: AsyncSession,
    user: User,
    data: UpdateUserRequest,
) -> list[FieldError]:
    """Email must be unique among users other than the one being updated."""
    errors: list[FieldError] = []
    if await email_in_use(db, data.email, exclude_user_id=user.id):
        errors.append(FieldError("email", EMAIL_TAKEN_MESSAGE, "unique"))
    return errors


def raise_for_errors(errors: list[FieldError]) -> None:
    if errors:
        raise FieldValidationError(errors)
