"""
Use case: Verify an email address with a one-shot token.

Input: VerifyEmailCommand (token)
Output: VerifyEmailResult (confirm) / TokenCheckResult (check)
Side effects: Marks the account verified and burns the token (confirm only).
Failure cases: InvalidTokenError.
"""

import logging

from visionchat.application.auth.dtos import (
    TokenCheckResult,
    VerifyEmailCommand,
    VerifyEmailResult,
)
from visionchat.application.auth.views import regular_account_view
from visionchat.domain.auth.entities import User, utcnow
from visionchat.domain.auth.errors import InvalidTokenError
from visionchat.domain.auth.ports import UserRepository

logger = logging.getLogger(__name__)

TOKEN_PURPOSE = "verification"


class VerifyEmailUseCase:
    """Confirms or inspects an email verification token.

    Confirming does not log the user in; the client is expected to
    send them to the login form afterwards.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def _find(self, token: str) -> User:
        user = self._user_repo.get_by_verification_token(token)
        if user is None or not user.verification_token_is_live(utcnow()):
            raise InvalidTokenError(TOKEN_PURPOSE)
        return user

    def execute(self, command: VerifyEmailCommand) -> VerifyEmailResult:
        user = self._find(command.token)
        user.mark_verified()
        self._user_repo.save(user)
        logger.info("Email verified for id=%s", user.id)
        return VerifyEmailResult(
            message="Email verified successfully! Please login to continue.",
            user=regular_account_view(user),
        )

    def check(self, command: VerifyEmailCommand) -> TokenCheckResult:
        """Report whether a verification link is still usable without consuming it."""
        user = self._find(command.token)
        if user.email_verified:
            return TokenCheckResult(
                message="Email is already verified", valid=True, verified=True
            )
        return TokenCheckResult(
            message="Token is valid",
            valid=True,
            verified=False,
            name=user.name,
            email=user.email,
        )
