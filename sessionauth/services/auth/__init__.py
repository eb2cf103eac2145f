from sessionauth.services.auth.auth_service import AuthService, AuthConfig
from sessionauth.services.auth.cookies import AuthCookies
from sessionauth.services.auth.session_service import SessionService
from sessionauth.services.auth.verification_service import VerificationCodeService

__all__ = [
    "AuthService",
    "AuthConfig",
    "AuthCookies",
    "SessionService",
    "VerificationCodeService",
]
