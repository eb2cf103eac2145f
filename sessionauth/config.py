"""
SessionAuth application settings.

Extends the base settings with session, verification-code and email
configuration.
"""

from functools import lru_cache
from typing import Optional

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """SessionAuth-specific settings."""

    # ==========================================================================
    # Frontend URL (for email links and CORS)
    # ==========================================================================
    APP_ORIGIN: str = "http://localhost:5173"

    # ==========================================================================
    # Session settings
    # ==========================================================================
    SESSION_EXPIRE_DAYS: int = 30
    # Sessions with this much lifetime left (or less) are extended on refresh
    SESSION_REFRESH_THRESHOLD_HOURS: int = 24

    # ==========================================================================
    # Verification code settings
    # ==========================================================================
    EMAIL_VERIFICATION_EXPIRE_DAYS: int = 365
    PASSWORD_RESET_EXPIRE_HOURS: int = 1
    PASSWORD_RESET_WINDOW_MINUTES: int = 5
    # Requests are rejected once more than this many codes exist in the window
    PASSWORD_RESET_MAX_RECENT: int = 1

    # ==========================================================================
    # Email Settings
    # ==========================================================================
    EMAIL_MODE: str = "console"  # console, smtp, resend
    RESEND_API_KEY: Optional[str] = None
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM_EMAIL: str = "noreply@sessionauth.dev"
    SMTP_FROM_NAME: str = "SessionAuth"

    def get_cors_origins(self) -> list:
        """Cookies require an explicit origin, so "*" falls back to APP_ORIGIN."""
        if self.CORS_ORIGINS == "*":
            return [self.APP_ORIGIN]
        return super().get_cors_origins()


@lru_cache()
def get_settings() -> Settings:
    """Load settings from the environment once."""
    return Settings()
