"""
FastAPI dependencies for SessionAuth application.

Provides dependency injection for all services.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import TokenService
from sessionauth.config import Settings
from sessionauth.middleware.auth import AuthMiddleware
from sessionauth.services.auth.auth_service import AuthService, AuthConfig
from sessionauth.services.auth.cookies import AuthCookies
from sessionauth.services.auth.session_service import SessionService
from sessionauth.services.auth.verification_service import VerificationCodeService
from sessionauth.services.email.email_service import EmailService
from sessionauth.services.user.user_service import UserService


# ─────────────────────────────────────────────────────────────────
# Service instances (initialized at startup)
# ─────────────────────────────────────────────────────────────────

_token_service: Optional[TokenService] = None
_user_service: Optional[UserService] = None
_session_service: Optional[SessionService] = None
_verification_service: Optional[VerificationCodeService] = None
_email_service: Optional[EmailService] = None
_auth_service: Optional[AuthService] = None
_auth_middleware: Optional[AuthMiddleware] = None
_auth_cookies: Optional[AuthCookies] = None


def init_all_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """
    Initialize all services with database and settings.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        settings: Loaded application settings
    """
    global _token_service, _user_service, _session_service, _verification_service
    global _email_service, _auth_service, _auth_middleware, _auth_cookies

    _token_service = TokenService(
        access_secret=settings.JWT_SECRET,
        refresh_secret=settings.JWT_REFRESH_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        audience=settings.JWT_AUDIENCE,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_token_expire_days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS,
    )

    _user_service = UserService(db=db)
    _session_service = SessionService(db=db, expiration_days=settings.SESSION_EXPIRE_DAYS)
    _verification_service = VerificationCodeService(db=db)

    _email_service = EmailService(
        mode=settings.EMAIL_MODE,
        from_email=settings.SMTP_FROM_EMAIL,
        from_name=settings.SMTP_FROM_NAME,
        resend_api_key=settings.RESEND_API_KEY,
        smtp_host=settings.SMTP_HOST,
        smtp_port=settings.SMTP_PORT,
        smtp_user=settings.SMTP_USER,
        smtp_password=settings.SMTP_PASSWORD,
    )

    _auth_service = AuthService(
        user_service=_user_service,
        session_service=_session_service,
        verification_service=_verification_service,
        token_service=_token_service,
        email_service=_email_service,
        config=AuthConfig.from_settings(settings),
    )

    _auth_middleware = AuthMiddleware(token_service=_token_service)

    _auth_cookies = AuthCookies(
        access_token_expire=_token_service.access_token_expire,
        refresh_token_expire=_token_service.refresh_token_expire,
        secure=not settings.is_development(),
    )


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_auth_service() -> AuthService:
    """Get auth service instance."""
    if _auth_service is None:
        raise RuntimeError("Auth services not initialized. Call init_all_services first.")
    return _auth_service


def get_auth_middleware() -> AuthMiddleware:
    """Get auth middleware instance."""
    if _auth_middleware is None:
        raise RuntimeError("Auth services not initialized. Call init_all_services first.")
    return _auth_middleware


def get_auth_cookies() -> AuthCookies:
    """Get auth cookie writer instance."""
    if _auth_cookies is None:
        raise RuntimeError("Auth services not initialized. Call init_all_services first.")
    return _auth_cookies


# ─────────────────────────────────────────────────────────────────
# Request helpers
# ─────────────────────────────────────────────────────────────────

async def require_auth(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> dict:
    """
    Dependency that requires a valid access token.

    Usage:
        @router.get("/protected")
        async def protected_route(auth: Annotated[dict, Depends(require_auth)]):
            return {"user_id": auth["userId"]}
    """
    return await auth_middleware.require_auth(request)


def get_user_agent(request: Request) -> Optional[str]:
    """Extract User-Agent from request."""
    return request.headers.get("User-Agent")
