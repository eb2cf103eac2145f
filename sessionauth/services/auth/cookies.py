"""
Auth cookie helpers.

Tokens travel as two httpOnly cookies:
- accessToken: sent on every path, max_age = access token lifetime
- refreshToken: sent only to the refresh endpoint, max_age = refresh lifetime

samesite="strict" keeps both off cross-site requests. secure is dropped only
in development so the cookies work over plain http://localhost.
"""

from datetime import timedelta

from fastapi import Response

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"
REFRESH_PATH = "/auth/refresh"


class AuthCookies:
    """Writes and clears the token cookies with matching lifetimes."""

    def __init__(
        self,
        access_token_expire: timedelta,
        refresh_token_expire: timedelta,
        secure: bool = True,
    ):
        self._access_max_age = int(access_token_expire.total_seconds())
        self._refresh_max_age = int(refresh_token_expire.total_seconds())
        self._secure = secure

    def set_access_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            ACCESS_TOKEN_COOKIE,
            value=token,
            httponly=True,
            samesite="strict",
            secure=self._secure,
            max_age=self._access_max_age,
        )

    def set_refresh_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            REFRESH_TOKEN_COOKIE,
            value=token,
            httponly=True,
            samesite="strict",
            secure=self._secure,
            max_age=self._refresh_max_age,
            path=REFRESH_PATH,
        )

    def set_auth_cookies(self, response: Response, access_token: str, refresh_token: str) -> None:
        self.set_access_cookie(response, access_token)
        self.set_refresh_cookie(response, refresh_token)

    @staticmethod
    def clear_auth_cookies(response: Response) -> None:
        # Path must match the one the cookie was set with
        response.delete_cookie(ACCESS_TOKEN_COOKIE)
        response.delete_cookie(REFRESH_TOKEN_COOKIE, path=REFRESH_PATH)
