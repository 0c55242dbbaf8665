"""
Data Transfer Objects for the auth application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SignupCommand:
    """Input DTO for creating (or refreshing an unverified) password account.

    Attributes:
        name: Display name, trimmed before storage.
        email: Email address, lowercased and trimmed before storage.
        password: Plain-text password, hashed before storage.
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True)
class SignupResult:
    """Output DTO for signup.

    Attributes:
        message: Human-readable outcome.
        created: True when a new account was inserted, False when an
            unverified account was refreshed.
        email_sent: Whether the verification email went out.
        requires_verification: Always True for password accounts.
    """

    message: str
    created: bool
    email_sent: bool = True
    requires_verification: bool = True


@dataclass(frozen=True)
class LoginCommand:
    email: str
    password: str


@dataclass(frozen=True)
class GoogleLoginCommand:
    """Input DTO for Google sign-in.

    Attributes:
        credential: The ID token returned by Google Identity Services.
    """

    credential: str


@dataclass(frozen=True)
class AccountView:
    """Public representation of an account of either type.

    Attributes:
        id: Account identifier.
        name: Display name.
        email: Email address.
        avatar: Avatar URL, if any.
        type: "regular" or "google".
        created_at: Account creation time.
        email_verified: Verification flag of a password account.
        verified: Verification flag of a Google account.
    """

    id: str
    name: str
    email: str
    avatar: Optional[str]
    type: str
    created_at: datetime
    email_verified: Optional[bool] = None
    verified: Optional[bool] = None


@dataclass(frozen=True)
class SessionResult:
    """Output DTO for a successful login: session token plus account."""

    message: str
    token: str
    user: AccountView


@dataclass(frozen=True)
class VerifyEmailCommand:
    token: str


@dataclass(frozen=True)
class VerifyEmailResult:
    message: str
    user: AccountView
    verified: bool = True


@dataclass(frozen=True)
class TokenCheckResult:
    """Output DTO for checking a one-shot token before using it.

    Attributes:
        message: Human-readable outcome.
        valid: Whether the token can still be used.
        verified: For verification tokens, whether the account is verified.
        name: Account name, when the token is usable.
        email: Account email, when the token is usable.
    """

    message: str
    valid: bool
    verified: Optional[bool] = None
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class EmailCommand:
    """Input DTO for flows keyed by an email address (resend, forgot password)."""

    email: str


@dataclass(frozen=True)
class ResetPasswordCommand:
    token: str
    password: str


@dataclass(frozen=True)
class MessageResult:
    """Output DTO for flows that only report an outcome message."""

    message: str
    email_sent: Optional[bool] = None
