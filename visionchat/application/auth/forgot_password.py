"""
Use case: Request a password reset link.

Input: EmailCommand (email)
Output: MessageResult
Side effects: Issues a reset token; sends an email.
Failure cases: ResetNotVerifiedError, EmailDeliveryError.
"""

import logging
from datetime import timedelta

from visionchat.application.auth.dtos import EmailCommand, MessageResult
from visionchat.domain.auth.entities import utcnow
from visionchat.domain.auth.errors import EmailDeliveryError, ResetNotVerifiedError
from visionchat.domain.auth.ports import EmailSender, UserRepository
from visionchat.domain.auth.tokens import (
    generate_one_shot_token,
    password_reset_url,
    token_expiry,
)

logger = logging.getLogger(__name__)

UNKNOWN_EMAIL_MESSAGE = (
    "If an account with that email exists, we have sent a password reset link."
)


class ForgotPasswordUseCase:
    """Mails a password reset link to a verified account.

    Unknown addresses get the same success-shaped answer as known ones,
    so the endpoint cannot be used to discover which emails are registered.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        email_sender: EmailSender,
        site_url: str,
        token_lifetime: timedelta,
    ) -> None:
        self._user_repo = user_repo
        self._email_sender = email_sender
        self._site_url = site_url
        self._token_lifetime = token_lifetime

    def execute(self, command: EmailCommand) -> MessageResult:
        user = self._user_repo.get_by_email(command.email.strip().lower())
        if user is None:
            return MessageResult(message=UNKNOWN_EMAIL_MESSAGE)
        if not user.email_verified:
            raise ResetNotVerifiedError()

        token = generate_one_shot_token()
        user.issue_reset_token(token, token_expiry(utcnow(), self._token_lifetime))
        self._user_repo.save(user)

        sent = self._email_sender.send_password_reset(
            to=user.email,
            name=user.name,
            reset_url=password_reset_url(self._site_url, token),
        )
        if not sent:
            raise EmailDeliveryError("Failed to send password reset email")

        logger.info("Password reset email sent for id=%s", user.id)
        return MessageResult(
            message="Password reset email sent successfully! Please check your inbox."
        )
