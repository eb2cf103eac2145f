"""
Email service for sending transactional emails.

Supports SMTP, Resend API, and console logging modes.
"""

import logging
import uuid
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Optional

import aiosmtplib
import httpx

from sessionauth.services.email.templates import (
    get_verify_email_template,
    get_password_reset_template,
)

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class EmailService:
    """
    Email service with multi-mode support.

    Modes:
        - console: Log emails to console (development)
        - smtp: Send via SMTP
        - resend: Send via Resend HTTP API

    Every send returns a dict with "success" and, on success, "messageId".
    """

    def __init__(
        self,
        mode: str = "console",
        from_email: str = "noreply@sessionauth.dev",
        from_name: str = "SessionAuth",
        resend_api_key: Optional[str] = None,
        smtp_host: Optional[str] = None,
        smtp_port: int = 465,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
    ):
        """
        Initialize email service.

        Args:
            mode: "console", "smtp", or "resend"
            from_email: Sender email address
            from_name: Sender display name
            resend_api_key: Resend API key
            smtp_host: SMTP server host
            smtp_port: SMTP server port
            smtp_user: SMTP username
            smtp_password: SMTP password
        """
        self._mode = mode
        self._from_email = from_email
        self._from_name = from_name
        self._resend_api_key = resend_api_key
        self._smtp_host = smtp_host
        self._smtp_port = smtp_port
        self._smtp_user = smtp_user
        self._smtp_password = smtp_password

        if self._mode == "resend" and not self._resend_api_key:
            logger.warning("Resend API key not configured, falling back to console mode")
            self._mode = "console"
        elif self._mode == "smtp" and not self._smtp_host:
            logger.warning("SMTP host not configured, falling back to console mode")
            self._mode = "console"

        logger.info(f"Email service initialized in {self._mode} mode")

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def _sender(self) -> str:
        return f"{self._from_name} <{self._from_email}>"

    async def send_verification_email(self, to_email: str, verification_url: str) -> dict:
        """
        Send email verification email.

        Args:
            to_email: Recipient email address
            verification_url: Link embedding the verification code id

        Returns:
            dict with success status and messageId
        """
        return await self.send(to=to_email, **get_verify_email_template(verification_url))

    async def send_password_reset_email(self, to_email: str, reset_url: str) -> dict:
        """
        Send password reset email.

        Args:
            to_email: Recipient email address
            reset_url: Link embedding the reset code id and its expiry

        Returns:
            dict with success status and messageId
        """
        return await self.send(to=to_email, **get_password_reset_template(reset_url))

    async def send(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> dict:
        """
        Send email via configured provider.

        Args:
            to: Recipient email
            subject: Email subject
            html: HTML content
            text: Plain text content (optional)

        Returns:
            dict with success status and details
        """
        if self._mode == "console":
            return self._send_console(to, subject, html, text)
        elif self._mode == "smtp":
            return await self._send_smtp(to, subject, html, text)
        elif self._mode == "resend":
            return await self._send_resend(to, subject, html, text)
        else:
            logger.error(f"Unknown email mode: {self._mode}")
            return {"success": False, "error": f"Unknown email mode: {self._mode}"}

    def _send_console(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str],
    ) -> dict:
        """Log email to console (development mode)."""
        message_id = f"console-{uuid.uuid4().hex}"

        logger.info("=" * 60)
        logger.info("EMAIL (console mode)")
        logger.info(f"To: {to}")
        logger.info(f"Subject: {subject}")
        logger.info("-" * 60)
        logger.info(text or html)
        logger.info("=" * 60)

        return {
            "success": True,
            "mode": "console",
            "messageId": message_id,
        }

    async def _send_smtp(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str],
    ) -> dict:
        """Send email via SMTP."""
        message_id = make_msgid(domain=self._from_email.split("@")[-1])
        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = self._sender
            message["To"] = to
            message["Message-ID"] = message_id

            if text:
                message.attach(MIMEText(text, "plain"))
            message.attach(MIMEText(html, "html"))

            # Port 465 is implicit TLS; anything else upgrades with STARTTLS
            use_tls = self._smtp_port == 465

            await aiosmtplib.send(
                message,
                hostname=self._smtp_host,
                port=self._smtp_port,
                username=self._smtp_user,
                password=self._smtp_password,
                use_tls=use_tls,
                start_tls=not use_tls,
            )

            logger.info(f"Email sent via SMTP to {to}")
            return {
                "success": True,
                "mode": "smtp",
                "messageId": message_id,
            }

        except aiosmtplib.SMTPException as e:
            logger.error(f"Failed to send email via SMTP: {e}")
            return {
                "success": False,
                "error": str(e),
            }

    async def _send_resend(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str],
    ) -> dict:
        """Send email via Resend API."""
        payload = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if text:
            payload["text"] = text

        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    RESEND_API_URL,
                    headers={
                        "Authorization": f"Bearer {self._resend_api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
            except httpx.HTTPError as e:
                logger.error(f"Failed to send email via Resend: {e}")
                return {
                    "success": False,
                    "error": str(e),
                }

        if response.status_code == 200:
            data = response.json()
            logger.info(f"Email sent via Resend to {to}")
            return {
                "success": True,
                "mode": "resend",
                "messageId": data.get("id"),
            }

        try:
            error_msg = response.json().get("message", "Unknown error")
        except ValueError:
            error_msg = response.text or f"HTTP {response.status_code}"
        logger.error(f"Resend API error: {error_msg}")
        return {
            "success": False,
            "error": error_msg,
        }
