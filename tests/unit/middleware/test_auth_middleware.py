"""Unit tests for middleware auth (tunganotes/middleware/auth.py)."""

import uuid
from typing import Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from tunganotes.core.errors import register_exception_handlers
from tunganotes.database import get_db_session
from tunganotes.middleware import auth as auth_module
from tunganotes.middleware.auth import JWTBearer, get_access_token, get_current_user_id


class FakeUser:
    def __init__(self, active=True):
        self.active = active

    def can_login(self):
        return self.active


def fake_user_repository(users):
    class FakeUserRepository:
        def __init__(self, session):
            self.session = session

        async def get_by_id(self, user_id):
            return users.get(user_id)

    return FakeUserRepository


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    async def _no_db():
        yield None

    app.dependency_overrides[get_db_session] = _no_db

    @app.get("/protected")
    async def protected(user_id=Depends(JWTBearer())):
        return {"user_id": str(user_id)}

    @app.get("/me")
    async def me(user_id=Depends(get_current_user_id)):
        return {"user_id": str(user_id)}

    @app.get("/token")
    async def token(raw: str = Depends(get_access_token)):
        return {"token": raw}

    return app


def _make_bearer(token: Optional[str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"} if token is not None else {}


@pytest.fixture
def known_user(monkeypatch):
    uid = uuid.uuid4()

    async def _decode(token):
        return uid if token == "valid-token" else None

    monkeypatch.setattr(auth_module, "get_user_id_from_token", _decode)
    monkeypatch.setattr(auth_module, "UserRepository", fake_user_repository({uid: FakeUser()}))
    return uid


def _assert_rejected(resp):
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authorized"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_jwtbearer_accepts_valid_token(known_user):
    client = TestClient(build_app())
    resp = client.get("/protected", headers=_make_bearer("valid-token"))
    assert resp.status_code == 200
    assert resp.json() == {"user_id": str(known_user)}


def test_get_current_user_id_dependency(known_user):
    client = TestClient(build_app())
    resp = client.get("/me", headers=_make_bearer("valid-token"))
    assert resp.json() == {"user_id": str(known_user)}


def test_jwtbearer_rejects_missing_header(known_user):
    _assert_rejected(TestClient(build_app()).get("/protected"))


@pytest.mark.parametrize("header", ["Basic abc", "Bearer", "valid-token", "Token valid-token"])
def test_jwtbearer_rejects_wrong_scheme(known_user, header):
    client = TestClient(build_app())
    _assert_rejected(client.get("/protected", headers={"Authorization": header}))


def test_jwtbearer_rejects_invalid_token(known_user):
    client = TestClient(build_app())
    _assert_rejected(client.get("/protected", headers=_make_bearer("invalid")))


def test_jwtbearer_rejects_deleted_user(monkeypatch):
    uid = uuid.uuid4()

    async def _decode(token):
        return uid

    monkeypatch.setattr(auth_module, "get_user_id_from_token", _decode)
    monkeypatch.setattr(auth_module, "UserRepository", fake_user_repository({}))

    client = TestClient(build_app())
    _assert_rejected(client.get("/protected", headers=_make_bearer("valid-token")))


def test_jwtbearer_rejects_inactive_user(monkeypatch):
    uid = uuid.uuid4()

    async def _decode(token):
        return uid

    monkeypatch.setattr(auth_module, "get_user_id_from_token", _decode)
    monkeypatch.setattr(auth_module, "UserRepository", fake_user_repository({uid: FakeUser(active=False)}))

    client = TestClient(build_app())
    _assert_rejected(client.get("/protected", headers=_make_bearer("valid-token")))


def test_get_access_token():
    client = TestClient(build_app())
    assert client.get("/token", headers=_make_bearer("abc")).json() == {"token": "abc"}
    _assert_rejected(client.get("/token"))


async def test_real_token_against_database(test_app, async_client, test_user, auth_headers):
    resp = await async_client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == str(test_user.id)
