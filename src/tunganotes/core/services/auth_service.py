"""Authentication service implementation."""

import asyncio
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import blacklist_token, create_access_token, hash_password, verify_password
from ..errors import InvalidInput, NotFound, StoreError, Unauthenticated
from ..logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .interfaces import IAuthService

logger = get_logger("auth")


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> TokenResponse:
        """Register new user and return a token for them."""
        try:
            if await self.user_repo.is_username_taken(request.username):
                raise InvalidInput("Username already taken")

            # bcrypt is CPU bound; keep it off the event loop
            hashed_password = await asyncio.to_thread(hash_password, request.password)

            user = await self.user_repo.create_user({
                "username": request.username,
                "password_hash": hashed_password,
                "full_name": request.full_name,
                "is_active": True,
            })
        except IntegrityError as exc:
            # lost a race with a concurrent registration of the same name
            raise InvalidInput("Username already taken") from exc
        except SQLAlchemyError as exc:
            raise StoreError("Error creating user") from exc

        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._token_response(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a JWT."""
        try:
            user = await self.user_repo.get_by_username(request.username)
        except SQLAlchemyError as exc:
            raise StoreError("Error fetching user") from exc

        if not user or not user.can_login():
            raise Unauthenticated("Invalid credentials")

        if not await asyncio.to_thread(verify_password, request.password, user.password_hash):
            raise Unauthenticated("Invalid credentials")

        return self._token_response(user)

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        try:
            user = await self.user_repo.get_by_id(user_id)
        except SQLAlchemyError as exc:
            raise StoreError("Error fetching user") from exc

        if not user:
            raise NotFound("User not found")
        return UserResponse.model_validate(user)

    async def logout_user(self, user_id: UUID, access_token: str) -> bool:
        """Revoke the presented access token until it expires."""
        revoked = await blacklist_token(access_token)
        if not revoked:
            logger.warning("Logout without token revocation", extra={"user_id": str(user_id)})
        return revoked

    def _token_response(self, user: User) -> TokenResponse:
        access_token = create_access_token(data={"sub": str(user.id)})
        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )
