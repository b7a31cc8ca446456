"""Authentication middleware.

Resolves the bearer token of a request to the id of an existing, active
user. Every rejection produces the same ``Unauthenticated`` error.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import StoreError, Unauthenticated
from ..core.repositories.user_repository import UserRepository
from ..database import get_db_session
from ..security import get_user_id_from_token

# Reads the header only; missing credentials come back as None
bearer_scheme = HTTPBearer(auto_error=False)


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication."""

    def __init__(self):
        super(JWTBearer, self).__init__(auto_error=False)

    async def __call__(
        self,
        request: Request,
        session: AsyncSession = Depends(get_db_session),
    ) -> UUID:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            raise Unauthenticated()

        user_id = await get_user_id_from_token(credentials.credentials)
        if not user_id:
            raise Unauthenticated()

        try:
            user = await UserRepository(session).get_by_id(user_id)
        except SQLAlchemyError as exc:
            raise StoreError("Error verifying user") from exc

        # token outlived its user
        if not user or not user.can_login():
            raise Unauthenticated()

        return user_id


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: UUID = Depends(JWTBearer())) -> UUID:
    """Get current authenticated user ID."""
    return user_id


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Raw bearer token of the request."""
    if not credentials:
        raise Unauthenticated()
    return credentials.credentials
