"""
FastAPI router for Auth endpoints.

Provides registration, login, logout, token refresh, email verification
and password reset. Tokens are returned only as cookies.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Request, Response, status

from sessionauth.dependencies import get_auth_service, get_auth_cookies, get_user_agent
from sessionauth.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    MessageResponse,
    UserResponse,
)
from sessionauth.services.auth.auth_service import AuthService
from sessionauth.services.auth.cookies import (
    AuthCookies,
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def register(
    body: RegisterRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    cookies: Annotated[AuthCookies, Depends(get_auth_cookies)],
    user_agent: Annotated[Optional[str], Depends(get_user_agent)],
):
    """
    Register a new user account.

    Creates the account, emails a verification link and logs the device in.
    """
    result = await auth_service.register(body.email, body.password, user_agent)
    cookies.set_auth_cookies(response, result["accessToken"], result["refreshToken"])
    return result["user"]


@router.post("/login", response_model=MessageResponse)
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    cookies: Annotated[AuthCookies, Depends(get_auth_cookies)],
    user_agent: Annotated[Optional[str], Depends(get_user_agent)],
):
    """
    Login to an existing account.

    Starts a new session; other sessions of the user stay active.
    """
    result = await auth_service.login(body.email, body.password, user_agent)
    cookies.set_auth_cookies(response, result["accessToken"], result["refreshToken"])
    return {"message": "Login successful"}


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    cookies: Annotated[AuthCookies, Depends(get_auth_cookies)],
):
    """
    Logout from the current session.

    Always succeeds and clears the auth cookies.
    """
    await auth_service.logout(request.cookies.get(ACCESS_TOKEN_COOKIE))
    cookies.clear_auth_cookies(response)
    return {"message": "Logout successful"}


@router.api_route("/refresh", methods=["GET", "POST"], response_model=MessageResponse)
async def refresh(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    cookies: Annotated[AuthCookies, Depends(get_auth_cookies)],
):
    """
    Issue a new access token from the refresh token cookie.

    The refresh cookie is rewritten only when the session was extended.
    """
    result = await auth_service.refresh(request.cookies.get(REFRESH_TOKEN_COOKIE))

    cookies.set_access_cookie(response, result["accessToken"])
    if result["refreshToken"]:
        cookies.set_refresh_cookie(response, result["refreshToken"])

    return {"message": "Access token refreshed"}


@router.api_route("/email/verify/{code}", methods=["GET", "POST"], response_model=MessageResponse)
async def verify_email(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    code: str = Path(..., min_length=1, max_length=24),
):
    """Mark the owner of a verification code as verified."""
    await auth_service.verify_email(code)
    return {"message": "Email was successfully verified"}


@router.post("/password/forgot", response_model=MessageResponse)
async def forgot_password(
    body: ForgotPasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Email a password reset link."""
    await auth_service.send_password_reset_email(body.email)
    return {"message": "Password reset email sent"}


@router.post("/password/reset", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    cookies: Annotated[AuthCookies, Depends(get_auth_cookies)],
):
    """
    Set a new password using a reset code.

    Every session of the user is ended, so the caller must log in again.
    """
    await auth_service.reset_password(body.verificationCode, body.password)
    cookies.clear_auth_cookies(response)
    return {"message": "Password was reset successfully"}
