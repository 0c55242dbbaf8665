"""
Domain entities for the auth bounded context.

Two kinds of accounts exist side by side: password accounts that must
verify their email address, and Google accounts that arrive pre-verified.
They live in separate stores and a session token records which kind it
belongs to.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class AccountType(Enum):
    """Which account store a session belongs to."""

    REGULAR = "regular"
    GOOGLE = "google"


def _is_live(expires: Optional[datetime], now: datetime) -> bool:
    return expires is not None and expires > now


@dataclass
class User:
    """A password account.

    The verification and reset tokens are one-shot secrets; each is
    paired with an expiry and both are cleared once the token is used.
    """

    name: str
    email: str
    password_hash: str
    id: str = field(default_factory=new_id)
    avatar: Optional[str] = None
    email_verified: bool = False
    email_verification_token: Optional[str] = None
    token_expires: Optional[datetime] = None
    password_reset_token: Optional[str] = None
    password_reset_expires: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def verification_token_is_live(self, now: datetime) -> bool:
        return _is_live(self.token_expires, now)

    def reset_token_is_live(self, now: datetime) -> bool:
        return _is_live(self.password_reset_expires, now)

    def issue_verification_token(self, token: str, expires: datetime) -> None:
        self.email_verification_token = token
        self.token_expires = expires

    def mark_verified(self) -> None:
        self.email_verified = True
        self.email_verification_token = None
        self.token_expires = None

    def issue_reset_token(self, token: str, expires: datetime) -> None:
        self.password_reset_token = token
        self.password_reset_expires = expires

    def change_password(self, password_hash: str) -> None:
        """Store a new password hash and burn any pending reset token."""
        self.password_hash = password_hash
        self.password_reset_token = None
        self.password_reset_expires = None


@dataclass
class GoogleUser:
    """An account created through Google sign-in."""

    google_id: str
    name: str
    email: str
    avatar: str
    id: str = field(default_factory=new_id)
    verified: bool = True
    locale: str = "en"
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class GoogleIdentity:
    """Claims extracted from a verified Google ID token."""

    google_id: str
    email: Optional[str]
    email_verified: bool
    name: Optional[str] = None
    picture: Optional[str] = None
    locale: Optional[str] = None


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by a session token."""

    user_id: str
    email: str
    type: AccountType


@dataclass(frozen=True)
class AuthenticatedUser:
    """The account behind a request, resolved from its bearer token."""

    id: str
    name: str
    email: str
    type: AccountType
