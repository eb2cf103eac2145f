"""Unit tests for TokenService (sign / soft-fail verify)."""

import pytest
from datetime import datetime, timedelta, timezone
from bson import ObjectId
from jose import jwt

from common.auth import TokenService, TokenKind, ValidToken, InvalidToken


class TestSign:
    def test_access_token_carries_user_and_session(self, token_service):
        user_id, session_id = ObjectId(), ObjectId()

        token = token_service.sign_access_token(user_id, session_id)
        result = token_service.verify(token)

        assert isinstance(result, ValidToken)
        assert result.payload["userId"] == str(user_id)
        assert result.payload["sessionId"] == str(session_id)
        assert result.payload["aud"] == "user"

    def test_access_token_lifetime(self, token_service):
        now = datetime.now(timezone.utc).replace(microsecond=0)
        token = token_service.sign({"userId": "u", "sessionId": "s"}, TokenKind.ACCESS, now=now)

        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == 15 * 60

    def test_refresh_token_lifetime(self, token_service):
        now = datetime.now(timezone.utc).replace(microsecond=0)
        token = token_service.sign({"sessionId": "s"}, TokenKind.REFRESH, now=now)

        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == 30 * 24 * 3600
        assert "userId" not in claims

    def test_sign_helpers_use_given_clock(self, token_service):
        now = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(minutes=5)

        access = jwt.get_unverified_claims(token_service.sign_access_token("u", "s", now=now))
        refresh = jwt.get_unverified_claims(token_service.sign_refresh_token("s", now=now))

        assert access["iat"] == int(now.timestamp())
        assert refresh["iat"] == int(now.timestamp())

    def test_deterministic_for_same_clock(self, token_service):
        now = datetime.now(timezone.utc)
        claims = {"sessionId": "s"}

        assert (
            token_service.sign(claims, TokenKind.REFRESH, now=now)
            == token_service.sign(claims, TokenKind.REFRESH, now=now)
        )

    def test_requires_both_secrets(self):
        with pytest.raises(ValueError):
            TokenService(access_secret="only-one", refresh_secret="")


class TestVerify:
    def test_refresh_token_round_trip(self, token_service):
        token = token_service.sign_refresh_token("abc")

        result = token_service.verify(token, TokenKind.REFRESH)

        assert isinstance(result, ValidToken)
        assert result.payload["sessionId"] == "abc"

    def test_secrets_are_not_interchangeable(self, token_service):
        access = token_service.sign_access_token("u", "s")
        refresh = token_service.sign_refresh_token("s")

        assert token_service.verify(access, TokenKind.REFRESH) == InvalidToken("invalid")
        assert token_service.verify(refresh, TokenKind.ACCESS) == InvalidToken("invalid")

    def test_expired_token(self, token_service):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = token_service.sign({"userId": "u", "sessionId": "s"}, TokenKind.ACCESS, now=past)

        result = token_service.verify(token)

        assert isinstance(result, InvalidToken)
        assert result.expired

    def test_allow_expired_still_checks_signature(self, token_service):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = token_service.sign({"userId": "u", "sessionId": "s"}, TokenKind.ACCESS, now=past)
        other = TokenService(access_secret="other", refresh_secret="other-refresh")

        assert isinstance(token_service.verify(token, allow_expired=True), ValidToken)
        assert other.verify(token, allow_expired=True) == InvalidToken("invalid")

    def test_tampered_token(self, token_service):
        header, _, signature = token_service.sign_access_token("u", "s").split(".")
        forged_payload = token_service.sign_access_token("other", "s").split(".")[1]

        result = token_service.verify(f"{header}.{forged_payload}.{signature}")

        assert isinstance(result, InvalidToken)
        assert not result.expired

    def test_wrong_audience(self, token_service):
        token = jwt.encode(
            {
                "userId": "u",
                "sessionId": "s",
                "aud": "admin",
                "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            },
            "test-access-secret",
            algorithm="HS256",
        )

        assert token_service.verify(token) == InvalidToken("invalid")

    def test_missing_required_claim(self, token_service):
        token = token_service.sign({"sessionId": "s"}, TokenKind.ACCESS)

        assert token_service.verify(token) == InvalidToken("invalid")

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_garbage_never_raises(self, token_service, token):
        assert token_service.verify(token) == InvalidToken("invalid")
