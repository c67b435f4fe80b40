"""
User service - business logic for user management
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import Depends

from simple_example.database.entities import User
from simple_example.models.user import CreateUserDto, UpdateUserDto, UserDto
from simple_example.repositories.user_repository import UserRepository, get_user_repository
from simple_example.utils.exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations"""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def create(self, dto: CreateUserDto) -> UserDto:
        """
        Create a new user

        Args:
            dto: First name, last name and email of the new user

        Returns:
            UserDto of the created user

        Raises:
            DuplicateEmailError: a user with the same email already exists
            UserValidationError: the input failed validation
        """
        existing = await self.repository.get_by_email(dto.email)
        if existing is not None:
            logger.warning(f"Rejected user creation: email {dto.email} already in use")
            raise DuplicateEmailError(dto.email)

        user = User(dto.first_name, dto.last_name, dto.email)
        created = await self.repository.add(user)

        logger.info(f"Created user {created.id}")
        return UserDto.from_entity(created)

    async def get_by_id(self, user_id: UUID) -> Optional[UserDto]:
        """Get a user by id, or None when no such user exists"""
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None
        return UserDto.from_entity(user)

    async def get_all(self) -> List[UserDto]:
        users = await self.repository.get_all()
        return [UserDto.from_entity(user) for user in users]

    async def update(self, user_id: UUID, dto: UpdateUserDto) -> Optional[UserDto]:
        """
        Update name and email of an existing user

        Args:
            user_id: Id of the user to update
            dto: New first name, last name and email

        Returns:
            UserDto of the updated user, or None when the user does not exist

        Raises:
            DuplicateEmailError: the new email belongs to another user
            UserValidationError: the input failed validation
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None

        if dto.email != user.email:
            owner = await self.repository.get_by_email(dto.email)
            if owner is not None and owner.id != user.id:
                logger.warning(f"Rejected update of user {user_id}: email {dto.email} already in use")
                raise DuplicateEmailError(dto.email)
            user.update_email(dto.email)

        user.update_basic_info(dto.first_name, dto.last_name)
        updated = await self.repository.update(user)

        logger.info(f"Updated user {user_id}")
        return UserDto.from_entity(updated)

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns False when the user does not exist."""
        if not await self.repository.exists(user_id):
            return False

        await self.repository.delete(user_id)
        logger.info(f"Deleted user {user_id}")
        return True


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    """FastAPI dependency providing a request-scoped user service"""
    return UserService(repository)
