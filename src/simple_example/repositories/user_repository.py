"""
User repository - persistence of User entities through an async SQLAlchemy session
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from simple_example.database.connection import get_session
from simple_example.database.entities import User
from simple_example.utils.exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)


class UserRepository:
    """Data access for the users table"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, user: User) -> User:
        """
        Persist a new user

        Args:
            user: User entity; its id is assigned on construction

        Returns:
            The persisted user

        Raises:
            DuplicateEmailError: the unique email index rejected the row
        """
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self._raise_duplicate(user.email, e)
        logger.debug(f"Added user {user.id}")
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_all(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.created_at, User.id))
        return list(result.scalars().all())

    async def update(self, user: User) -> User:
        """Persist changes to an existing user, attached to this session or not"""
        try:
            # merge() autoflushes pending changes, so it can hit the unique index too
            merged = await self.session.merge(user)
            await self.session.commit()
        except IntegrityError as e:
            await self._raise_duplicate(user.email, e)
        logger.debug(f"Updated user {merged.id}")
        return merged

    async def delete(self, user_id: UUID) -> None:
        await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.commit()
        logger.debug(f"Deleted user {user_id}")

    async def exists(self, user_id: UUID) -> bool:
        result = await self.session.execute(select(User.id).where(User.id == user_id).limit(1))
        return result.scalar_one_or_none() is not None

    async def _raise_duplicate(self, email: str, error: IntegrityError) -> None:
        await self.session.rollback()
        logger.warning(f"Integrity error while saving user with email {email}: {error.orig}")
        raise DuplicateEmailError(email) from error


def get_user_repository(session: AsyncSession = Depends(get_session)) -> UserRepository:
    """FastAPI dependency providing a request-scoped repository"""
    return UserRepository(session)
