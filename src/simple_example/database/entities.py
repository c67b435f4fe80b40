"""
SQLAlchemy ORM entities
"""

import re
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from simple_example.utils.exceptions import UserValidationError

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validate_name(field: str, value: str) -> str:
    if value is None or not value.strip():
        raise UserValidationError(field, "must not be empty")
    value = value.strip()
    if len(value) > NAME_MAX_LENGTH:
        raise UserValidationError(field, f"must be at most {NAME_MAX_LENGTH} characters")
    return value


def _validate_email(value: str) -> str:
    if value is None or not value.strip():
        raise UserValidationError("email", "must not be empty")
    value = value.strip()
    if len(value) > EMAIL_MAX_LENGTH:
        raise UserValidationError("email", f"must be at most {EMAIL_MAX_LENGTH} characters")
    if not EMAIL_PATTERN.match(value):
        raise UserValidationError("email", "is not a valid email address")
    return value


class Base(DeclarativeBase):
    pass


class User(Base):
    """A registered user. Construction and mutation validate their input."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __init__(self, first_name: str, last_name: str, email: str):
        self.id = uuid.uuid4()
        self.first_name = _validate_name("first_name", first_name)
        self.last_name = _validate_name("last_name", last_name)
        self.email = _validate_email(email)
        self.created_at = _utcnow()
        self.updated_at = self.created_at

    def update_basic_info(self, first_name: str, last_name: str) -> None:
        """Replace first and last name"""
        first_name = _validate_name("first_name", first_name)
        last_name = _validate_name("last_name", last_name)
        self.first_name = first_name
        self.last_name = last_name
        self.updated_at = _utcnow()

    def update_email(self, email: str) -> None:
        """Replace the email address. Uniqueness is checked by the caller."""
        self.email = _validate_email(email)
        self.updated_at = _utcnow()

    def __repr__(self) -> str:
        return f"User(id={self.id!s}, email={self.email!r})"
