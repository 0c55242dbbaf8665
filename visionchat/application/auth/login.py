"""
Use case: Log in with email and password.

Input: LoginCommand (email, password)
Output: SessionResult
Side effects: None.
Failure cases: InvalidCredentialsError, LoginNotVerifiedError.
"""

import logging

from visionchat.application.auth.dtos import LoginCommand, SessionResult
from visionchat.application.auth.views import regular_account_view
from visionchat.domain.auth.entities import AccountType, TokenPayload
from visionchat.domain.auth.errors import InvalidCredentialsError, LoginNotVerifiedError
from visionchat.domain.auth.ports import PasswordHasher, TokenService, UserRepository

logger = logging.getLogger(__name__)


class LoginUseCase:
    """Exchanges valid credentials of a verified account for a session token."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._token_service = token_service

    def execute(self, command: LoginCommand) -> SessionResult:
        user = self._user_repo.get_by_email(command.email.strip().lower())
        if user is None or not self._hasher.verify(command.password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        if not user.email_verified:
            raise LoginNotVerifiedError()

        token = self._token_service.sign(
            TokenPayload(user_id=user.id, email=user.email, type=AccountType.REGULAR)
        )
        logger.info("Login succeeded for id=%s", user.id)
        return SessionResult(
            message="Login successful",
            token=token,
            user=regular_account_view(user),
        )
