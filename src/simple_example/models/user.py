"""
User-related Pydantic models
"""

from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from simple_example.database.entities import User


class UserBaseModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    # Surrounding whitespace is dropped so lookups see the stored form of the email
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class CreateUserDto(UserBaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)


class UpdateUserDto(UserBaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)


class UserDto(UserBaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str

    @classmethod
    def from_entity(cls, user: "User") -> "UserDto":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email
        )
