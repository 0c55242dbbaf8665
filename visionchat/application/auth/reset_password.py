"""
Use case: Reset a password with a one-shot token.

Input: ResetPasswordCommand (token, password)
Output: MessageResult (reset) / TokenCheckResult (check)
Side effects: Stores the new password hash and burns the token (reset only).
Failure cases: WeakPasswordError, InvalidTokenError.
"""

import logging

from visionchat.application.auth.dtos import (
    MessageResult,
    ResetPasswordCommand,
    TokenCheckResult,
)
from visionchat.domain.auth.entities import User, utcnow
from visionchat.domain.auth.errors import InvalidTokenError, WeakPasswordError
from visionchat.domain.auth.ports import PasswordHasher, UserRepository

logger = logging.getLogger(__name__)

TOKEN_PURPOSE = "password reset"


class ResetPasswordUseCase:
    """Sets a new password for the account holding a live reset token."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        password_min_length: int,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._password_min_length = password_min_length

    def _find(self, token: str) -> User:
        user = self._user_repo.get_by_reset_token(token)
        if user is None or not user.reset_token_is_live(utcnow()):
            raise InvalidTokenError(TOKEN_PURPOSE)
        return user

    def execute(self, command: ResetPasswordCommand) -> MessageResult:
        if len(command.password) < self._password_min_length:
            raise WeakPasswordError(self._password_min_length)

        user = self._find(command.token)
        user.change_password(self._hasher.hash(command.password))
        self._user_repo.save(user)
        logger.info("Password reset for id=%s", user.id)
        return MessageResult(
            message=(
                "Password reset successfully! You can now log in with your "
                "new password."
            )
        )

    def check(self, token: str) -> TokenCheckResult:
        user = self._find(token)
        return TokenCheckResult(
            message="Token is valid", valid=True, name=user.name, email=user.email
        )
