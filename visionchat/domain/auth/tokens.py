"""
One-shot account tokens and the links that carry them.

Verification and password-reset tokens are random 32-byte secrets
rendered as 64 hex characters.
"""

import secrets
from datetime import datetime, timedelta

ONE_SHOT_TOKEN_BYTES = 32


def generate_one_shot_token() -> str:
    """Return a fresh random token for email verification or password reset."""
    return secrets.token_hex(ONE_SHOT_TOKEN_BYTES)


def token_expiry(now: datetime, lifetime: timedelta) -> datetime:
    return now + lifetime


def verification_url(site_url: str, token: str) -> str:
    return f"{site_url.rstrip('/')}/auth/verify-email?token={token}"


def password_reset_url(site_url: str, token: str) -> str:
    return f"{site_url.rstrip('/')}/auth/reset-password?token={token}"
