"""
Use case: Resolve the account behind a bearer token.

Input: raw bearer token (or None)
Output: AuthenticatedUser (authenticate) / AccountView (profile)
Side effects: None.
Failure cases: AuthenticationRequiredError, InvalidSessionError, UserNotFoundError.
"""

from typing import Optional

from visionchat.application.auth.dtos import AccountView
from visionchat.application.auth.views import google_account_view, regular_account_view
from visionchat.domain.auth.entities import (
    AccountType,
    AuthenticatedUser,
    GoogleUser,
    User,
)
from visionchat.domain.auth.errors import (
    AuthenticationRequiredError,
    InvalidSessionError,
    UserNotFoundError,
)
from visionchat.domain.auth.ports import (
    GoogleUserRepository,
    TokenService,
    UserRepository,
)


class AuthenticateUseCase:
    """Verifies a session token and loads the account from the matching store."""

    def __init__(
        self,
        token_service: TokenService,
        user_repo: UserRepository,
        google_repo: GoogleUserRepository,
    ) -> None:
        self._token_service = token_service
        self._user_repo = user_repo
        self._google_repo = google_repo

    def _load(self, token: Optional[str]) -> User | GoogleUser:
        if not token:
            raise AuthenticationRequiredError()

        payload = self._token_service.verify(token)
        if payload is None:
            raise InvalidSessionError()

        account: User | GoogleUser | None
        if payload.type is AccountType.GOOGLE:
            account = self._google_repo.get_by_id(payload.user_id)
        else:
            account = self._user_repo.get_by_id(payload.user_id)

        if account is None:
            raise UserNotFoundError(payload.user_id)
        return account

    def execute(self, token: Optional[str]) -> AuthenticatedUser:
        account = self._load(token)
        account_type = (
            AccountType.GOOGLE if isinstance(account, GoogleUser) else AccountType.REGULAR
        )
        return AuthenticatedUser(
            id=account.id, name=account.name, email=account.email, type=account_type
        )

    def profile(self, token: Optional[str]) -> AccountView:
        """Return the public profile of the token's account."""
        account = self._load(token)
        if isinstance(account, GoogleUser):
            return google_account_view(account)
        return regular_account_view(account, include_verified=False)
