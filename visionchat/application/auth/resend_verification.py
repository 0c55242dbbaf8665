"""
Use case: Resend the email verification link.

Input: EmailCommand (email)
Output: MessageResult
Side effects: Issues a new verification token; sends an email.
Failure cases: AccountNotFoundError, AlreadyVerifiedError, EmailDeliveryError.
"""

import logging
from datetime import timedelta

from visionchat.application.auth.dtos import EmailCommand, MessageResult
from visionchat.domain.auth.entities import utcnow
from visionchat.domain.auth.errors import (
    AccountNotFoundError,
    AlreadyVerifiedError,
    EmailDeliveryError,
)
from visionchat.domain.auth.ports import EmailSender, UserRepository
from visionchat.domain.auth.tokens import (
    generate_one_shot_token,
    token_expiry,
    verification_url,
)

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    """Replaces the verification token of an unverified account and mails it."""

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
            raise AccountNotFoundError()
        if user.email_verified:
            raise AlreadyVerifiedError()

        token = generate_one_shot_token()
        user.issue_verification_token(token, token_expiry(utcnow(), self._token_lifetime))
        self._user_repo.save(user)

        sent = self._email_sender.send_verification(
            to=user.email,
            name=user.name,
            verification_url=verification_url(self._site_url, token),
        )
        if not sent:
            raise EmailDeliveryError("Failed to send verification email")

        logger.info("Verification email re-sent for id=%s", user.id)
        return MessageResult(
            message="Verification email sent successfully! Please check your inbox.",
            email_sent=True,
        )
