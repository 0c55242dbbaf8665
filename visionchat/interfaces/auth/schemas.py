"""
Pydantic schemas for auth API request/response validation.

Shape checks only (required, non-empty, bounded). Rules such as the
minimum password length belong to the use cases.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

NAME_MAX_LEN = 100
EMAIL_MAX_LEN = 254
PASSWORD_MAX_LEN = 128
TOKEN_MAX_LEN = 4096


class SignupRequest(BaseModel):
    """Request schema for password signup.

    Attributes:
        name: Display name.
        email: Email address; stored lowercased and trimmed.
        password: Plain-text password.
    """

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class EmailRequest(BaseModel):
    """Request schema for the resend-verification and forgot-password flows."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN)


class TokenRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=TOKEN_MAX_LEN)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=TOKEN_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class GoogleLoginRequest(BaseModel):
    """Request schema for Google sign-in.

    Attributes:
        credential: ID token issued by Google Identity Services.
    """

    credential: str = Field(..., min_length=1, max_length=TOKEN_MAX_LEN)


class AccountSchema(BaseModel):
    """Public account data. Unset verification flags are omitted."""

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    type: str
    created_at: datetime
    email_verified: Optional[bool] = None
    verified: Optional[bool] = None


class SignupResponse(BaseModel):
    message: str
    email_sent: bool
    requires_verification: bool


class SessionResponse(BaseModel):
    """Response schema for password and Google login."""

    message: str
    token: str
    user: AccountSchema


class VerifyEmailResponse(BaseModel):
    message: str
    verified: bool
    user: AccountSchema


class TokenOwnerSchema(BaseModel):
    name: str
    email: str


class TokenCheckResponse(BaseModel):
    """Response schema for checking a verification or reset link."""

    message: str
    valid: bool
    verified: Optional[bool] = None
    user: Optional[TokenOwnerSchema] = None


class OutcomeResponse(BaseModel):
    message: str
    email_sent: Optional[bool] = None


class ProfileResponse(BaseModel):
    user: AccountSchema
