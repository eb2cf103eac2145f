"""
Email templates for verification and password reset messages.

Each template returns a dict with subject, html and text.
"""

_LAYOUT = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="margin: 0; padding: 0; background-color: #f5f5f5; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333333;">
    <table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="background-color: #f5f5f5;">
        <tr>
            <td align="center" style="padding: 20px 0;">
                <table role="presentation" width="600" cellpadding="0" cellspacing="0" style="background-color: #ffffff; max-width: 600px;">
                    <tr>
                        <td align="center" bgcolor="#1F3A5F" style="background-color: #1F3A5F; padding: 32px 20px;">
                            <h1 style="margin: 0; font-size: 26px; color: #ffffff; font-weight: 600;">{header}</h1>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 40px 30px;">
                            <p style="margin: 0 0 24px 0; font-size: 16px;">{body}</p>
                            <table role="presentation" cellpadding="0" cellspacing="0" style="margin: 24px auto;">
                                <tr>
                                    <td align="center" bgcolor="#1F3A5F" style="background-color: #1F3A5F; border-radius: 8px;">
                                        <a href="{url}" target="_blank" style="display: inline-block; padding: 14px 28px; font-size: 16px; font-weight: 600; color: #ffffff; text-decoration: none;">{button}</a>
                                    </td>
                                </tr>
                            </table>
                            <p style="margin: 24px 0 8px 0; font-size: 14px; color: #666666;">Or copy and paste this link into your browser:</p>
                            <p style="margin: 0 0 24px 0; font-size: 14px; color: #1F3A5F; word-break: break-all;">{url}</p>
                            <p style="margin: 0; font-size: 14px; color: #666666;">{ignore_notice}</p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
"""


def _render(header: str, body: str, button: str, url: str, ignore_notice: str) -> dict:
    html = _LAYOUT.format(
        header=header,
        body=body,
        button=button,
        url=url,
        ignore_notice=ignore_notice,
    )
    text = f"{header}\n\n{body}\n\n{url}\n\n{ignore_notice}\n"
    return {"html": html, "text": text}


def get_verify_email_template(url: str) -> dict:
    """Verification email pointing at the verify-email URL."""
    return {
        "subject": "Verify Email Address",
        **_render(
            header="Verify your email",
            body="Thanks for signing up! Please verify your email address by clicking the button below.",
            button="Verify Email",
            url=url,
            ignore_notice="If you didn't create an account, you can safely ignore this email.",
        ),
    }


def get_password_reset_template(url: str) -> dict:
    """Password reset email pointing at the reset URL."""
    return {
        "subject": "Password Reset Request",
        **_render(
            header="Reset your password",
            body="We received a request to reset your password. The link below expires in one hour.",
            button="Reset Password",
            url=url,
            ignore_notice="If you didn't request a password reset, you can safely ignore this email.",
        ),
    }
