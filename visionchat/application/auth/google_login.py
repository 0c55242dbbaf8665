"""
Use case: Sign in with a Google ID token.

Input: GoogleLoginCommand (credential)
Output: SessionResult
Side effects: Creates or refreshes the Google account.
Failure cases: GoogleAuthError.
"""

import logging
from urllib.parse import quote

from visionchat.application.auth.dtos import GoogleLoginCommand, SessionResult
from visionchat.application.auth.views import google_account_view
from visionchat.domain.auth.entities import AccountType, GoogleUser, TokenPayload
from visionchat.domain.auth.errors import GoogleAuthError
from visionchat.domain.auth.ports import (
    GoogleTokenVerifier,
    GoogleUserRepository,
    TokenService,
)

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Google User"
DEFAULT_LOCALE = "en"


def default_avatar_url(name: str | None) -> str:
    """Return a generated initials avatar for accounts without a picture."""
    return (
        "https://ui-avatars.com/api/"
        f"?name={quote(name or 'User')}&background=667eea&color=fff"
    )


class GoogleLoginUseCase:
    """Upserts a Google account from verified ID token claims and opens a session."""

    def __init__(
        self,
        google_repo: GoogleUserRepository,
        verifier: GoogleTokenVerifier,
        token_service: TokenService,
    ) -> None:
        self._google_repo = google_repo
        self._verifier = verifier
        self._token_service = token_service

    def execute(self, command: GoogleLoginCommand) -> SessionResult:
        """Run the Google sign-in use case.

        Raises:
            GoogleAuthError: If the token is invalid or the Google email
                is not verified.
        """
        identity = self._verifier.verify(command.credential)
        if not identity.email_verified or not identity.email:
            raise GoogleAuthError("Google email not verified")
        email = identity.email.strip().lower()

        user = self._google_repo.get_by_google_id(identity.google_id)
        if user is not None:
            user.name = identity.name or user.name
            user.email = email
            user.avatar = identity.picture or user.avatar
            user.locale = identity.locale or user.locale
            self._google_repo.save(user)
        else:
            user = GoogleUser(
                google_id=identity.google_id,
                name=identity.name or DEFAULT_NAME,
                email=email,
                avatar=identity.picture or default_avatar_url(identity.name),
                verified=identity.email_verified,
                locale=identity.locale or DEFAULT_LOCALE,
            )
            self._google_repo.add(user)
            logger.info("Created Google account id=%s", user.id)

        token = self._token_service.sign(
            TokenPayload(user_id=user.id, email=user.email, type=AccountType.GOOGLE)
        )
        return SessionResult(
            message="Google authentication successful",
            token=token,
            user=google_account_view(user),
        )
