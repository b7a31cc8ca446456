"""User repository: the lookups behind registration, login and the auth gate."""

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """Insert a user; a duplicate username surfaces as ``IntegrityError``."""
        user = User(**user_data)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.id == user_id))

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.username == username))

    async def is_username_taken(self, username: str) -> bool:
        stmt = select(exists().where(User.username == username))
        return bool(await self.session.scalar(stmt))
