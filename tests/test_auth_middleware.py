"""Unit tests for AuthMiddleware access-token cookie validation."""

import pytest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from bson import ObjectId

from common.auth import TokenKind
from common.utils.exceptions import UnauthorizedException
from sessionauth.middleware.auth import AuthMiddleware, INVALID_ACCESS_TOKEN


def _request(cookies: dict):
    return SimpleNamespace(cookies=cookies, state=SimpleNamespace())


@pytest.fixture
def middleware(token_service):
    return AuthMiddleware(token_service)


class TestRequireAuth:
    @pytest.mark.asyncio
    async def test_valid_token_attaches_identity(self, middleware, token_service):
        user_id, session_id = str(ObjectId()), str(ObjectId())
        request = _request({"accessToken": token_service.sign_access_token(user_id, session_id)})

        auth = await middleware.require_auth(request)

        assert auth == {"userId": user_id, "sessionId": session_id}
        assert request.state.user_id == user_id
        assert request.state.session_id == session_id

    @pytest.mark.asyncio
    async def test_missing_cookie(self, middleware):
        with pytest.raises(UnauthorizedException) as exc_info:
            await middleware.require_auth(_request({}))

        assert exc_info.value.message == "Not authorized"

    @pytest.mark.asyncio
    async def test_expired_token(self, middleware, token_service):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = token_service.sign({"userId": "u", "sessionId": "s"}, TokenKind.ACCESS, now=past)

        with pytest.raises(UnauthorizedException) as exc_info:
            await middleware.require_auth(_request({"accessToken": token}))

        assert exc_info.value.message == "Token expired"
        assert exc_info.value.code == INVALID_ACCESS_TOKEN

    @pytest.mark.asyncio
    async def test_refresh_token_rejected(self, middleware, token_service):
        token = token_service.sign_refresh_token(str(ObjectId()))

        with pytest.raises(UnauthorizedException) as exc_info:
            await middleware.require_auth(_request({"accessToken": token}))

        assert exc_info.value.message == "Invalid token"
        assert exc_info.value.code == INVALID_ACCESS_TOKEN
