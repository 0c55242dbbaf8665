"""
Domain-specific errors for the auth bounded context.

All errors raised from the auth domain and its use cases are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class AuthDomainError(Exception):
    """Base error for all auth domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidCredentialsError(AuthDomainError):
    """Raised when an email/password pair does not match an account.

    The message is identical for unknown emails and wrong passwords.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class EmailNotVerifiedError(AuthDomainError):
    """Raised when a password account has not confirmed its email yet."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class LoginNotVerifiedError(EmailNotVerifiedError):
    """Raised on login attempts by unverified accounts."""

    def __init__(self) -> None:
        super().__init__(
            "Please verify your email address before logging in. "
            "Check your inbox for the verification link."
        )


class ResetNotVerifiedError(EmailNotVerifiedError):
    """Raised when an unverified account asks for a password reset."""

    def __init__(self) -> None:
        super().__init__(
            "Please verify your email address first before resetting your password."
        )


class EmailAlreadyRegisteredError(AuthDomainError):
    """Raised on signup with the email of an already verified account."""

    def __init__(self) -> None:
        super().__init__("User with this email already exists and is verified")


class AlreadyVerifiedError(AuthDomainError):
    """Raised when a verification email is requested for a verified account."""

    def __init__(self) -> None:
        super().__init__("This email address is already verified")


class AccountNotFoundError(AuthDomainError):
    """Raised when no password account exists for an email address."""

    def __init__(self) -> None:
        super().__init__("No account found with this email address")


class InvalidTokenError(AuthDomainError):
    """Raised when a one-shot verification or reset token is unknown or expired."""

    def __init__(self, purpose: str) -> None:
        super().__init__(f"Invalid or expired {purpose} token")
        self.purpose = purpose


class EmailDeliveryError(AuthDomainError):
    """Raised when a transactional email could not be sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class GoogleAuthError(AuthDomainError):
    """Raised when a Google credential is rejected."""

    def __init__(self, message: str = "Invalid Google token") -> None:
        super().__init__(message)


class AuthenticationRequiredError(AuthDomainError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Authentication token required")


class InvalidSessionError(AuthDomainError):
    """Raised when a bearer token fails verification."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class UserNotFoundError(AuthDomainError):
    """Raised when a valid session token points at a deleted account."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class WeakPasswordError(AuthDomainError):
    """Raised when a new password is shorter than the configured minimum."""

    def __init__(self, min_length: int) -> None:
        super().__init__(
            f"Password must be at least {min_length} characters long"
        )
        self.min_length = min_length
