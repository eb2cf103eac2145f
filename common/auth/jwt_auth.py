"""
JWT token service for access/refresh token pairs.

Two token kinds are signed with distinct secrets and lifetimes:
- access: short-lived, carries userId and sessionId
- refresh: long-lived, carries sessionId only

Verification never raises. It classifies a token as ValidToken or
InvalidToken and leaves the HTTP decision to the caller.

Example:
    tokens = TokenService(
        access_secret="access-secret",
        refresh_secret="refresh-secret",
    )

    access = tokens.sign_access_token(user_id, session_id)
    result = tokens.verify(access)
    if isinstance(result, ValidToken):
        print(result.payload["sessionId"])
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, Any, Optional, Union

from jose import jwt, JWTError, ExpiredSignatureError


class TokenKind(str, Enum):
    """Kind of token; selects secret, lifetime and required claims."""

    ACCESS = "access"
    REFRESH = "refresh"


_REQUIRED_CLAIMS = {
    TokenKind.ACCESS: ("userId", "sessionId"),
    TokenKind.REFRESH: ("sessionId",),
}


@dataclass(frozen=True)
class ValidToken:
    """Signature, audience, expiry and claims all checked out."""

    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InvalidToken:
    """Token rejected; reason is "expired" or "invalid"."""

    reason: str = "invalid"
    payload: None = None

    @property
    def expired(self) -> bool:
        return self.reason == "expired"


TokenResult = Union[ValidToken, InvalidToken]


class TokenService:
    """
    Signs and verifies access and refresh tokens.

    Stateless: the only inputs are the configured secrets, the claims,
    and the clock.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        audience: str = "user",
        access_token_expire_minutes: int = 15,
        refresh_token_expire_days: int = 30,
    ):
        """
        Initialize the token service.

        Args:
            access_secret: Secret used for access tokens
            refresh_secret: Secret used for refresh tokens (must differ)
            algorithm: JWT algorithm (default: HS256)
            audience: Audience claim written into and required on every token
            access_token_expire_minutes: Access token lifetime
            refresh_token_expire_days: Refresh token lifetime
        """
        if not access_secret or not refresh_secret:
            raise ValueError("Both access and refresh secrets are required")

        self.algorithm = algorithm
        self.audience = audience
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)
        self.refresh_token_expire = timedelta(days=refresh_token_expire_days)

        self._secrets = {
            TokenKind.ACCESS: access_secret,
            TokenKind.REFRESH: refresh_secret,
        }
        self._lifetimes = {
            TokenKind.ACCESS: self.access_token_expire,
            TokenKind.REFRESH: self.refresh_token_expire,
        }

    def sign(
        self,
        claims: Dict[str, Any],
        kind: TokenKind = TokenKind.ACCESS,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Encode claims plus audience, issued-at and expiry.

        Args:
            claims: Identity claims (string values)
            kind: Token kind selecting secret and lifetime
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            **claims,
            "aud": self.audience,
            "iat": issued_at,
            "exp": issued_at + self._lifetimes[kind],
        }
        return jwt.encode(payload, self._secrets[kind], algorithm=self.algorithm)

    def sign_access_token(
        self, user_id: str, session_id: str, now: Optional[datetime] = None
    ) -> str:
        """Create an access token bound to a user and a session."""
        return self.sign(
            {"userId": str(user_id), "sessionId": str(session_id)},
            TokenKind.ACCESS,
            now=now,
        )

    def sign_refresh_token(self, session_id: str, now: Optional[datetime] = None) -> str:
        """Create a refresh token bound to a session."""
        return self.sign({"sessionId": str(session_id)}, TokenKind.REFRESH, now=now)

    def verify(
        self,
        token: Optional[str],
        kind: TokenKind = TokenKind.ACCESS,
        allow_expired: bool = False,
    ) -> TokenResult:
        """
        Decode and validate a token without raising.

        Args:
            token: Encoded token (None or empty is invalid)
            kind: Expected token kind; selects the verification secret
            allow_expired: Skip the expiry check (signature is still verified)

        Returns:
            ValidToken with the payload, or InvalidToken with a reason
        """
        if not token:
            return InvalidToken("invalid")

        try:
            payload = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_exp": not allow_expired},
            )
        except ExpiredSignatureError:
            return InvalidToken("expired")
        except JWTError:
            return InvalidToken("invalid")

        for claim in _REQUIRED_CLAIMS[kind]:
            if not payload.get(claim):
                return InvalidToken("invalid")

        return ValidToken(payload)
