"""
Auth orchestration.

Composes the user store, session store, verification code ledger, token
service and email gateway into the register / login / logout / refresh /
verify-email / password-reset operations. Each operation is one request's
sequence of awaited store and email calls; failures are raised as typed
APIExceptions and converted to HTTP responses at the boundary.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from common.auth import TokenService, TokenKind, ValidToken
from common.utils.exceptions import (
    ConflictException,
    InternalServerException,
    NotFoundException,
    RateLimitException,
    UnauthorizedException,
)
from sessionauth.models import VerificationCodeType, public_session, public_user
from sessionauth.services.auth.session_service import SessionService
from sessionauth.services.auth.verification_service import VerificationCodeService
from sessionauth.services.email.email_service import EmailService
from sessionauth.services.user.user_service import UserService

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthConfig:
    """Policy values for the auth flows."""

    app_origin: str
    session_ttl: timedelta = timedelta(days=30)
    session_refresh_threshold: timedelta = timedelta(days=1)
    email_verification_ttl: timedelta = timedelta(days=365)
    password_reset_ttl: timedelta = timedelta(hours=1)
    password_reset_window: timedelta = timedelta(minutes=5)
    password_reset_max_recent: int = 1

    @classmethod
    def from_settings(cls, settings) -> "AuthConfig":
        return cls(
            app_origin=settings.APP_ORIGIN.rstrip("/"),
            session_ttl=timedelta(days=settings.SESSION_EXPIRE_DAYS),
            session_refresh_threshold=timedelta(hours=settings.SESSION_REFRESH_THRESHOLD_HOURS),
            email_verification_ttl=timedelta(days=settings.EMAIL_VERIFICATION_EXPIRE_DAYS),
            password_reset_ttl=timedelta(hours=settings.PASSWORD_RESET_EXPIRE_HOURS),
            password_reset_window=timedelta(minutes=settings.PASSWORD_RESET_WINDOW_MINUTES),
            password_reset_max_recent=settings.PASSWORD_RESET_MAX_RECENT,
        )


class AuthService:
    """
    Session/token lifecycle and verification-code protocol.
    """

    def __init__(
        self,
        user_service: UserService,
        session_service: SessionService,
        verification_service: VerificationCodeService,
        token_service: TokenService,
        email_service: EmailService,
        config: AuthConfig,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize AuthService.

        Args:
            user_service: Credential store
            session_service: Session store
            verification_service: Verification code ledger
            token_service: Access/refresh token signing
            email_service: Delivery gateway for verification/reset emails
            config: Lifetimes, rate-limit policy and the app origin for links
            clock: Source of the current time
        """
        self._users = user_service
        self._sessions = session_service
        self._codes = verification_service
        self._tokens = token_service
        self._email = email_service
        self._config = config
        self._clock = clock

    def _issue_tokens(self, user_id, session_id, now: datetime) -> dict:
        return {
            "accessToken": self._tokens.sign_access_token(str(user_id), str(session_id), now=now),
            "refreshToken": self._tokens.sign_refresh_token(str(session_id), now=now),
        }

    async def register(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None
    ) -> dict:
        """
        Create an account, send the verification email and log the device in.

        Returns:
            dict with user (public), accessToken and refreshToken

        Raises:
            ConflictException: Email already registered
        """
        if await self._users.email_exists(email):
            logger.warning("Registration rejected: email already in use")
            raise ConflictException("Email already in use")

        now = self._clock()
        user = await self._users.create_user(email, password)
        if user is None:
            logger.warning("Registration rejected: email taken by concurrent insert")
            raise ConflictException("Email already in use")
        user_id = user["_id"]

        code = await self._codes.create_code(
            user_id,
            VerificationCodeType.EMAIL_VERIFICATION,
            expires_at=now + self._config.email_verification_ttl,
            now=now,
        )

        url = f"{self._config.app_origin}/email/verify/{code['_id']}"
        # User and code stay persisted even if delivery fails
        sent = await self._email.send_verification_email(user["email"], url)
        if not sent.get("success"):
            logger.warning(
                f"Verification email to user {user_id} failed: {sent.get('error')}"
            )

        session = await self._sessions.create_session(user_id, user_agent, now=now)

        return {
            "user": public_user(user),
            **self._issue_tokens(user_id, session["_id"], now),
        }

    async def login(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None
    ) -> dict:
        """
        Verify credentials and start a new session.

        Returns:
            dict with user (public), accessToken and refreshToken

        Raises:
            UnauthorizedException: Unknown email or wrong password
        """
        user = await self._users.authenticate(email, password)
        if user is None:
            logger.warning("Login rejected: invalid credentials")
            raise UnauthorizedException("Invalid email or password")

        now = self._clock()
        session = await self._sessions.create_session(user["_id"], user_agent, now=now)

        return {
            "user": public_user(user),
            **self._issue_tokens(user["_id"], session["_id"], now),
        }

    async def logout(self, access_token: Optional[str]) -> None:
        """
        End the session named by the access token.

        The token's signature must check out but its expiry is ignored, so
        a client holding an expired access token can still log out. Never
        raises for missing, invalid or already-ended sessions.
        """
        result = self._tokens.verify(access_token, TokenKind.ACCESS, allow_expired=True)
        if isinstance(result, ValidToken):
            await self._sessions.delete_session(result.payload["sessionId"])

    async def refresh(self, refresh_token: Optional[str]) -> dict:
        """
        Mint a new access token from a refresh token.

        Sessions with one day or less remaining are extended to a full
        lifetime and get a new refresh token; otherwise the client keeps
        its existing refresh token.

        Returns:
            dict with accessToken and refreshToken (None when not rotated)

        Raises:
            UnauthorizedException: Missing/invalid refresh token, or the
                session is gone or expired
        """
        if not refresh_token:
            raise UnauthorizedException("Missing refresh token")

        result = self._tokens.verify(refresh_token, TokenKind.REFRESH)
        if not isinstance(result, ValidToken):
            raise UnauthorizedException("Invalid refresh token")

        session = await self._sessions.get_session(result.payload["sessionId"])
        now = self._clock()
        if not session or session["expiresAt"] <= now:
            raise UnauthorizedException("Session expired")

        session_id = session["_id"]
        new_refresh_token = None

        if session["expiresAt"] - now <= self._config.session_refresh_threshold:
            await self._sessions.extend_session(session_id, now + self._config.session_ttl)
            new_refresh_token = self._tokens.sign_refresh_token(str(session_id), now=now)
            logger.info(f"Session {session_id} extended and refresh token rotated")

        return {
            "accessToken": self._tokens.sign_access_token(
                str(session["userId"]), str(session_id), now=now
            ),
            "refreshToken": new_refresh_token,
        }

    async def verify_email(self, code: str) -> dict:
        """
        Consume an email verification code and mark its user verified.

        Raises:
            NotFoundException: Unknown, wrong-type or expired code
            InternalServerException: The owning user could not be updated
        """
        valid_code = await self._codes.find_valid_code(
            code, VerificationCodeType.EMAIL_VERIFICATION, now=self._clock()
        )
        if not valid_code:
            raise NotFoundException("Invalid or expired verification code")

        updated_user = await self._users.mark_verified(valid_code["userId"])
        if not updated_user:
            logger.error(f"Verification code {code} points at missing user {valid_code['userId']}")
            raise InternalServerException("Failed to verify email")

        await self._codes.delete_code(valid_code["_id"])
        logger.info(f"Email verified for user {updated_user['_id']}")

        return {"user": public_user(updated_user)}

    async def send_password_reset_email(self, email: str) -> dict:
        """
        Issue a password reset code and email it.

        More than `password_reset_max_recent` codes created within the
        window rejects the request, so with the default of 1 the third
        request inside five minutes is the first one refused.

        Returns:
            dict with the reset url and the delivery emailId

        Raises:
            NotFoundException: Unknown email
            RateLimitException: Too many recent reset requests
            InternalServerException: The email could not be delivered
        """
        user = await self._users.get_user_by_email(email)
        if not user:
            raise NotFoundException("User not found")

        now = self._clock()
        recent = await self._codes.count_recent_codes(
            user["_id"],
            VerificationCodeType.PASSWORD_RESET,
            since=now - self._config.password_reset_window,
        )
        if recent > self._config.password_reset_max_recent:
            logger.warning(f"Password reset rate limit hit for user {user['_id']}")
            raise RateLimitException(
                "Too many requests, please try again later",
                retry_after=int(self._config.password_reset_window.total_seconds()),
            )

        expires_at = now + self._config.password_reset_ttl
        code = await self._codes.create_code(
            user["_id"],
            VerificationCodeType.PASSWORD_RESET,
            expires_at=expires_at,
            now=now,
        )

        expires_ms = int(expires_at.timestamp() * 1000)
        url = f"{self._config.app_origin}/password/reset?code={code['_id']}&exp={expires_ms}"

        sent = await self._email.send_password_reset_email(user["email"], url)
        if not sent.get("success"):
            logger.error(f"Password reset email to user {user['_id']} failed: {sent.get('error')}")
            raise InternalServerException("Failed to send password reset email")

        return {
            "url": url,
            "emailId": sent.get("messageId"),
        }

    async def reset_password(self, verification_code: str, password: str) -> dict:
        """
        Consume a reset code, set the new password and end every session.

        Raises:
            NotFoundException: Unknown, wrong-type or expired code
            InternalServerException: The owning user could not be updated
        """
        valid_code = await self._codes.find_valid_code(
            verification_code, VerificationCodeType.PASSWORD_RESET, now=self._clock()
        )
        if not valid_code:
            raise NotFoundException("Invalid or expired verification code")

        updated_user = await self._users.update_password(valid_code["userId"], password)
        if not updated_user:
            logger.error(
                f"Reset code {verification_code} points at missing user {valid_code['userId']}"
            )
            raise InternalServerException("Failed to reset password")

        await self._codes.delete_code(valid_code["_id"])
        await self._sessions.revoke_all_sessions(updated_user["_id"])
        logger.info(f"Password reset for user {updated_user['_id']}")

        return {"user": public_user(updated_user)}

    async def get_user(self, user_id: str) -> dict:
        """
        Load the public view of a user.

        Raises:
            NotFoundException: No such user
        """
        user = await self._users.get_user_by_id(user_id)
        if not user:
            raise NotFoundException("User not found")
        return public_user(user)

    async def list_sessions(self, user_id: str, current_session_id: str) -> list[dict]:
        """Active sessions of a user, newest first, flagging the caller's own."""
        sessions = await self._sessions.get_user_sessions(user_id, now=self._clock())
        return [public_session(s, current_session_id) for s in sessions]

    async def revoke_session(self, user_id: str, session_id: str) -> None:
        """
        End one of the user's sessions.

        Raises:
            NotFoundException: No such session for this user
        """
        if not await self._sessions.revoke_user_session(user_id, session_id):
            raise NotFoundException("Session not found")
