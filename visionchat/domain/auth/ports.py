"""
Port interfaces (ABCs) for the auth bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from visionchat.domain.auth.entities import (
    GoogleIdentity,
    GoogleUser,
    TokenPayload,
    User,
)


class UserRepository(ABC):
    """Port for persisting and retrieving password accounts."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Return the account for a (lowercased) email, or None."""
        raise NotImplementedError

    @abstractmethod
    def get_by_verification_token(self, token: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_reset_token(self, token: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> None:
        """Insert a new account."""
        raise NotImplementedError

    @abstractmethod
    def save(self, user: User) -> None:
        """Update an existing account, refreshing its updated_at."""
        raise NotImplementedError


class GoogleUserRepository(ABC):
    """Port for persisting and retrieving Google accounts."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[GoogleUser]:
        raise NotImplementedError

    @abstractmethod
    def get_by_google_id(self, google_id: str) -> Optional[GoogleUser]:
        raise NotImplementedError

    @abstractmethod
    def add(self, user: GoogleUser) -> None:
        raise NotImplementedError

    @abstractmethod
    def save(self, user: GoogleUser) -> None:
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        raise NotImplementedError


class TokenService(ABC):
    """Port for issuing and checking session tokens."""

    @abstractmethod
    def sign(self, payload: TokenPayload) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> Optional[TokenPayload]:
        """Return the payload of a valid token, or None for any failure."""
        raise NotImplementedError


class EmailSender(ABC):
    """Port for transactional account emails.

    Both methods return False instead of raising when delivery fails.
    """

    @abstractmethod
    def send_verification(self, to: str, name: str, verification_url: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def send_password_reset(self, to: str, name: str, reset_url: str) -> bool:
        raise NotImplementedError


class GoogleTokenVerifier(ABC):
    """Port for validating Google ID tokens."""

    @abstractmethod
    def verify(self, credential: str) -> GoogleIdentity:
        """Return the identity claims of a valid credential.

        Raises:
            GoogleAuthError: If the credential is invalid or not for this app.
        """
        raise NotImplementedError
