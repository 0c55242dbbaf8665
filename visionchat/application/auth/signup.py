"""
Use case: Sign up with email and password.

Input: SignupCommand (name, email, password)
Output: SignupResult
Side effects: Inserts or updates a password account; sends a verification email.
Failure cases: WeakPasswordError, EmailAlreadyRegisteredError, EmailDeliveryError.
"""

import logging
from datetime import timedelta

from visionchat.application.auth.dtos import SignupCommand, SignupResult
from visionchat.domain.auth.entities import User, utcnow
from visionchat.domain.auth.errors import (
    EmailAlreadyRegisteredError,
    EmailDeliveryError,
    WeakPasswordError,
)
from visionchat.domain.auth.ports import EmailSender, PasswordHasher, UserRepository
from visionchat.domain.auth.tokens import (
    generate_one_shot_token,
    token_expiry,
    verification_url,
)

logger = logging.getLogger(__name__)


class SignupUseCase:
    """Creates password accounts that must verify their email before login.

    Signing up again with the email of an account that never verified
    is allowed: the account takes the new name and password and gets a
    fresh verification link.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        email_sender: EmailSender,
        site_url: str,
        token_lifetime: timedelta,
        password_min_length: int,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._email_sender = email_sender
        self._site_url = site_url
        self._token_lifetime = token_lifetime
        self._password_min_length = password_min_length

    def execute(self, command: SignupCommand) -> SignupResult:
        """Run the signup use case.

        Raises:
            WeakPasswordError: If the password is too short.
            EmailAlreadyRegisteredError: If a verified account owns the email.
            EmailDeliveryError: If the verification email could not be sent.
        """
        if len(command.password) < self._password_min_length:
            raise WeakPasswordError(self._password_min_length)

        email = command.email.strip().lower()
        name = command.name.strip()
        now = utcnow()
        token = generate_one_shot_token()
        expires = token_expiry(now, self._token_lifetime)

        existing = self._user_repo.get_by_email(email)
        if existing is not None:
            if existing.email_verified:
                raise EmailAlreadyRegisteredError()

            logger.info("Refreshing unverified account id=%s", existing.id)
            existing.name = name
            existing.password_hash = self._hasher.hash(command.password)
            existing.issue_verification_token(token, expires)
            self._user_repo.save(existing)
            self._send(existing, token, "Failed to send verification email")
            return SignupResult(
                message=(
                    "Account updated. Please check your email to verify "
                    "your account before logging in."
                ),
                created=False,
            )

        user = User(
            name=name,
            email=email,
            password_hash=self._hasher.hash(command.password),
        )
        user.issue_verification_token(token, expires)
        self._user_repo.add(user)
        logger.info("Created account id=%s", user.id)

        self._send(user, token, "User created but failed to send verification email")
        return SignupResult(
            message=(
                "Account created successfully! Please check your email to "
                "verify your account before logging in."
            ),
            created=True,
        )

    def _send(self, user: User, token: str, failure_message: str) -> None:
        sent = self._email_sender.send_verification(
            to=user.email,
            name=user.name,
            verification_url=verification_url(self._site_url, token),
        )
        if not sent:
            raise EmailDeliveryError(failure_message)
