"""
Authentication middleware for protected routes.

Validates the access token cookie and attaches the caller's identity
to the request.
"""

import logging
from typing import Optional

from fastapi import Request

from common.auth import TokenService, TokenKind, ValidToken
from common.utils.exceptions import UnauthorizedException
from sessionauth.services.auth.cookies import ACCESS_TOKEN_COOKIE

logger = logging.getLogger(__name__)

INVALID_ACCESS_TOKEN = "INVALID_ACCESS_TOKEN"


class AuthMiddleware:
    """
    Middleware that validates the access token and attaches user to request.

    Access tokens are self-contained: a valid signature within the token
    lifetime is accepted without a session lookup, so a revoked session
    keeps working until its access token expires.
    """

    def __init__(self, token_service: TokenService):
        """
        Initialize AuthMiddleware.

        Args:
            token_service: For access token verification
        """
        self._token_service = token_service

    async def require_auth(self, request: Request) -> dict:
        """
        Validate request is authenticated.

        Args:
            request: HTTP request object

        Returns:
            dict with userId and sessionId of the caller

        Raises:
            UnauthorizedException: Missing, expired or invalid access token

        Side Effects:
            - Attaches user id to request.state.user_id
            - Attaches session id to request.state.session_id
        """
        token = self._extract_token(request)

        if not token:
            raise UnauthorizedException(message="Not authorized")

        result = self._token_service.verify(token, TokenKind.ACCESS)

        if not isinstance(result, ValidToken):
            raise UnauthorizedException(
                message="Token expired" if result.expired else "Invalid token",
                code=INVALID_ACCESS_TOKEN,
            )

        request.state.user_id = result.payload["userId"]
        request.state.session_id = result.payload["sessionId"]

        return {
            "userId": result.payload["userId"],
            "sessionId": result.payload["sessionId"],
        }

    def _extract_token(self, request: Request) -> Optional[str]:
        """Read the access token cookie, if any."""
        return request.cookies.get(ACCESS_TOKEN_COOKIE) or None
