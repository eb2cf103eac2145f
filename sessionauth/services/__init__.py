"""
SessionAuth Services.

All service classes organized by feature.
"""

# Auth services
from sessionauth.services.auth.auth_service import AuthService, AuthConfig
from sessionauth.services.auth.cookies import AuthCookies
from sessionauth.services.auth.session_service import SessionService
from sessionauth.services.auth.verification_service import VerificationCodeService

# User services
from sessionauth.services.user.user_service import UserService

# Email services
from sessionauth.services.email.email_service import EmailService

__all__ = [
    "AuthService",
    "AuthConfig",
    "AuthCookies",
    "SessionService",
    "VerificationCodeService",
    "UserService",
    "EmailService",
]
