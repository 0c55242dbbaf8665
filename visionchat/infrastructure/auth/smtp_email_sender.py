"""
Adapter: SMTP email sender.

Implements EmailSender port with smtplib over STARTTLS.

When no mailbox credentials are configured (local development), the
message that would have been sent is written to the log instead and
counts as delivered, so signup and reset flows remain usable.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

from visionchat.domain.auth.ports import EmailSender

logger = logging.getLogger(__name__)

VERIFY_SUBJECT = "Verify your VisionChat AI account"
RESET_SUBJECT = "Reset your VisionChat AI password"

_EMAIL_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; color: #1f2937;">
    <div style="max-width: 560px; margin: 0 auto; padding: 24px;">
      <h2 style="color: #667eea;">{heading}</h2>
      <p>Hi {name},</p>
      <p>{intro}</p>
      <p style="text-align: center; margin: 32px 0;">
        <a href="{url}" style="background: #667eea; color: #ffffff;
           padding: 12px 24px; border-radius: 6px; text-decoration: none;">{action}</a>
      </p>
      <p>Or paste this link into your browser:<br><a href="{url}">{url}</a></p>
      <p style="color: #6b7280; font-size: 12px;">{footer}</p>
    </div>
  </body>
</html>
"""


def render_verification_email(name: str, url: str) -> str:
    return _EMAIL_TEMPLATE.format(
        heading="Welcome to VisionChat AI",
        name=escape(name),
        intro="Please confirm your email address to activate your account.",
        url=escape(url, quote=True),
        action="Verify email",
        footer="This link expires in 24 hours. If you did not sign up, ignore this email.",
    )


def render_password_reset_email(name: str, url: str) -> str:
    return _EMAIL_TEMPLATE.format(
        heading="Password reset",
        name=escape(name),
        intro="We received a request to reset your password.",
        url=escape(url, quote=True),
        action="Reset password",
        footer=(
            "This link expires in 24 hours. If you did not ask for a reset, "
            "your password is unchanged."
        ),
    )


class SmtpEmailSender(EmailSender):
    """Sends HTML account emails through an authenticated SMTP relay."""

    def __init__(
        self,
        address: Optional[str],
        password: Optional[str],
        host: str = "smtp.gmail.com",
        port: int = 587,
        sender_name: str = "VisionChat AI",
        timeout: float = 10.0,
    ) -> None:
        self._address = address
        self._password = password
        self._host = host
        self._port = port
        self._sender_name = sender_name
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._address and self._password)

    def send_verification(self, to: str, name: str, verification_url: str) -> bool:
        return self._send(
            to, VERIFY_SUBJECT, render_verification_email(name, verification_url), verification_url
        )

    def send_password_reset(self, to: str, name: str, reset_url: str) -> bool:
        return self._send(
            to, RESET_SUBJECT, render_password_reset_email(name, reset_url), reset_url
        )

    def _send(self, to: str, subject: str, html: str, link: str) -> bool:
        if not self.configured:
            logger.warning(
                "Email credentials not set; not sending. to=%s subject=%r link=%s",
                to,
                subject,
                link,
            )
            return True

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f'"{self._sender_name}" <{self._address}>'
        message["To"] = to
        message.attach(MIMEText(html, "html", "utf-8"))

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                server.starttls()
                server.login(self._address, self._password)
                server.sendmail(self._address, [to], message.as_string())
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to send %r email", subject)
            return False

        logger.info("Sent %r email", subject)
        return True
