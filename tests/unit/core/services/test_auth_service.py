"""Unit tests for AuthService."""

import uuid

import pytest

from tunganotes.core.errors import InvalidInput, NotFound, Unauthenticated
from tunganotes.core.schemas.auth import LoginRequest, RegisterRequest
from tunganotes.core.services.auth_service import AuthService
from tunganotes.security import create_access_token, get_user_id_from_token


async def test_register_returns_usable_token(test_session):
    svc = AuthService(test_session)
    resp = await svc.register_user(RegisterRequest(username="alice", password="wonderland1", full_name="Alice"))

    assert resp.token_type == "bearer"
    assert resp.user.username == "alice"
    assert resp.expires_in == svc.settings.access_token_expire_minutes * 60
    assert await get_user_id_from_token(resp.access_token) == resp.user.id


async def test_register_duplicate_username(test_session, test_user):
    svc = AuthService(test_session)
    with pytest.raises(InvalidInput) as exc_info:
        await svc.register_user(RegisterRequest(username=test_user.username, password="whatever123"))
    assert exc_info.value.message == "Username already taken"


async def test_register_stores_hash_not_password(test_session):
    svc = AuthService(test_session)
    resp = await svc.register_user(RegisterRequest(username="bob", password="builder123"))
    user = await svc.user_repo.get_by_id(resp.user.id)
    assert user.password_hash != "builder123"


async def test_login(test_session, test_user, test_password):
    resp = await AuthService(test_session).authenticate_user(
        LoginRequest(username=test_user.username, password=test_password)
    )
    assert resp.user.id == test_user.id
    assert await get_user_id_from_token(resp.access_token) == test_user.id


async def test_login_wrong_password(test_session, test_user):
    with pytest.raises(Unauthenticated) as exc_info:
        await AuthService(test_session).authenticate_user(
            LoginRequest(username=test_user.username, password="not-the-password")
        )
    assert exc_info.value.message == "Invalid credentials"


async def test_login_unknown_user(test_session):
    with pytest.raises(Unauthenticated):
        await AuthService(test_session).authenticate_user(
            LoginRequest(username="nobody", password="whatever123")
        )


async def test_login_inactive_user(test_session, test_user, test_password):
    test_user.is_active = False
    await test_session.commit()
    with pytest.raises(Unauthenticated):
        await AuthService(test_session).authenticate_user(
            LoginRequest(username=test_user.username, password=test_password)
        )


async def test_get_current_user(test_session, test_user):
    svc = AuthService(test_session)
    profile = await svc.get_current_user(test_user.id)
    assert profile.username == test_user.username

    with pytest.raises(NotFound) as exc_info:
        await svc.get_current_user(uuid.uuid4())
    assert exc_info.value.message == "User not found"


async def test_logout_blacklists_token(test_session, test_user, fake_redis):
    token = create_access_token({"sub": str(test_user.id)})
    assert await AuthService(test_session).logout_user(test_user.id, token) is True
    assert await get_user_id_from_token(token) is None


async def test_logout_without_redis_reports_false(test_session, test_user):
    token = create_access_token({"sub": str(test_user.id)})
    assert await AuthService(test_session).logout_user(test_user.id, token) is False
