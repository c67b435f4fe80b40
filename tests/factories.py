"""
Test data factory for users
"""

from typing import Any, Dict

from faker import Faker

from simple_example.database.entities import User
from simple_example.models.user import CreateUserDto, UpdateUserDto


class UserDataFactory:
    """Generates realistic user data with unique emails"""

    def __init__(self, fake: Faker):
        self.fake = fake

    def email(self) -> str:
        return self.fake.unique.email()

    def payload(self, **overrides) -> Dict[str, Any]:
        """camelCase JSON body for POST/PUT /users"""
        data = {
            "firstName": self.fake.first_name(),
            "lastName": self.fake.last_name(),
            "email": self.email()
        }
        data.update(overrides)
        return data

    def create_dto(self, **overrides) -> CreateUserDto:
        return CreateUserDto.model_validate(self.payload(**overrides))

    def update_dto(self, **overrides) -> UpdateUserDto:
        return UpdateUserDto.model_validate(self.payload(**overrides))

    def entity(self, **overrides) -> User:
        data = {
            "first_name": self.fake.first_name(),
            "last_name": self.fake.last_name(),
            "email": self.email()
        }
        data.update(overrides)
        return User(**data)
