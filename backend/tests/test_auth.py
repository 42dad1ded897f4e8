"""
Tests for JWT sessions and the get_current_user_id dependency.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest
from fastapi import HTTPException

from backend import config
from backend.auth import create_jwt, decode_jwt, get_current_user_id


def _token(payload: dict, secret: str | None = None) -> str:
    return jwt.encode(payload, secret or config.settings.JWT_SECRET, algorithm=config.settings.JWT_ALGORITHM)


class TestJWT:
    """Test JWT creation and validation."""

    def test_create_jwt(self):
        token = create_jwt(uuid4())

        assert isinstance(token, str)
        assert token.count(".") == 2

    def test_decode_jwt(self):
        user_id = uuid4()
        payload = decode_jwt(create_jwt(user_id))

        assert payload["sub"] == str(user_id)
        assert payload["exp"] > payload["iat"]

    def test_expiry_follows_settings(self):
        payload = decode_jwt(create_jwt(uuid4()))

        assert payload["exp"] - payload["iat"] == pytest.approx(config.settings.JWT_EXPIRY_HOURS * 3600, abs=5)

    def test_decode_expired_jwt(self):
        past = datetime.now(UTC) - timedelta(hours=1)
        token = _token({"sub": str(uuid4()), "exp": past, "iat": past - timedelta(hours=1)})

        with pytest.raises(HTTPException) as exc_info:
            decode_jwt(token)

        assert exc_info.value.status_code == 401
        assert "expired" in exc_info.value.detail.lower()

    def test_decode_wrong_secret(self):
        token = _token({"sub": str(uuid4())}, secret="some-other-secret")

        with pytest.raises(HTTPException) as exc_info:
            decode_jwt(token)

        assert exc_info.value.status_code == 401
        assert "invalid" in exc_info.value.detail.lower()

    def test_decode_garbage(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_jwt("not.a.jwt")

        assert exc_info.value.status_code == 401


class TestCurrentUserId:
    """Test the session-cookie dependency."""

    async def test_valid_session(self):
        user_id = uuid4()

        assert await get_current_user_id(create_jwt(user_id)) == user_id

    async def test_missing_cookie(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user_id(None)

        assert exc_info.value.status_code == 401
        assert "not authenticated" in exc_info.value.detail.lower()

    async def test_missing_sub(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user_id(_token({"iat": datetime.now(UTC)}))

        assert exc_info.value.status_code == 401

    async def test_sub_not_a_uuid(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user_id(_token({"sub": "user-42"}))

        assert exc_info.value.status_code == 401


class TestProtectedRoutes:
    """Every data route rejects requests without a session."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/api/internal/sdui/tasks"),
            ("POST", "/api/a2ui/actions"),
            ("POST", "/api/uploads/images"),
            ("GET", "/tasks"),
        ],
    )
    async def test_unauthenticated(self, async_client, method, path):
        kwargs = {"json": {"action": "delete", "args": []}} if path == "/api/a2ui/actions" else {}
        res = await async_client.request(method, path, **kwargs)

        assert res.status_code == 401

    async def test_invalid_cookie(self, async_client):
        res = await async_client.get("/api/internal/sdui/tasks", cookies={"session": "garbage"})

        assert res.status_code == 401
