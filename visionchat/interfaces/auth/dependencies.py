"""
Dependency injection for the auth bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the auth context.
"""

from datetime import timedelta

from fastapi import Depends

from visionchat.application.auth.forgot_password import ForgotPasswordUseCase
from visionchat.application.auth.google_login import GoogleLoginUseCase
from visionchat.application.auth.login import LoginUseCase
from visionchat.application.auth.resend_verification import ResendVerificationUseCase
from visionchat.application.auth.reset_password import ResetPasswordUseCase
from visionchat.application.auth.signup import SignupUseCase
from visionchat.application.auth.verify_email import VerifyEmailUseCase
from visionchat.core.config import settings
from visionchat.domain.auth.ports import (
    EmailSender,
    GoogleTokenVerifier,
    GoogleUserRepository,
    PasswordHasher,
    TokenService,
    UserRepository,
)
from visionchat.infrastructure.auth.google_token_verifier import GoogleIdTokenVerifier
from visionchat.infrastructure.auth.password_hasher import BcryptPasswordHasher
from visionchat.infrastructure.auth.smtp_email_sender import SmtpEmailSender
from visionchat.interfaces.dependencies import (
    get_google_user_repository,
    get_token_service,
    get_user_repository,
)


def _verification_lifetime() -> timedelta:
    return timedelta(hours=settings.verification_token_hours)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


def get_email_sender() -> EmailSender:
    """Build the SMTP sender; it logs instead of sending when unconfigured."""
    return SmtpEmailSender(
        address=settings.email_address,
        password=settings.email_password,
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender_name=settings.email_sender_name,
    )


def get_google_token_verifier() -> GoogleTokenVerifier:
    return GoogleIdTokenVerifier(client_id=settings.google_client_id)


def get_signup_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    email_sender: EmailSender = Depends(get_email_sender),
) -> SignupUseCase:
    """Build SignupUseCase with its infrastructure dependencies."""
    return SignupUseCase(
        user_repo=user_repo,
        hasher=hasher,
        email_sender=email_sender,
        site_url=settings.site_url,
        token_lifetime=_verification_lifetime(),
        password_min_length=settings.password_min_length,
    )


def get_login_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
) -> LoginUseCase:
    """Build LoginUseCase with its infrastructure dependencies."""
    return LoginUseCase(user_repo=user_repo, hasher=hasher, token_service=token_service)


def get_verify_email_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> VerifyEmailUseCase:
    return VerifyEmailUseCase(user_repo=user_repo)


def get_resend_verification_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ResendVerificationUseCase:
    return ResendVerificationUseCase(
        user_repo=user_repo,
        email_sender=email_sender,
        site_url=settings.site_url,
        token_lifetime=_verification_lifetime(),
    )


def get_forgot_password_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ForgotPasswordUseCase:
    return ForgotPasswordUseCase(
        user_repo=user_repo,
        email_sender=email_sender,
        site_url=settings.site_url,
        token_lifetime=_verification_lifetime(),
    )


def get_reset_password_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> ResetPasswordUseCase:
    return ResetPasswordUseCase(
        user_repo=user_repo,
        hasher=hasher,
        password_min_length=settings.password_min_length,
    )


def get_google_login_use_case(
    google_repo: GoogleUserRepository = Depends(get_google_user_repository),
    verifier: GoogleTokenVerifier = Depends(get_google_token_verifier),
    token_service: TokenService = Depends(get_token_service),
) -> GoogleLoginUseCase:
    """Build GoogleLoginUseCase with its infrastructure dependencies."""
    return GoogleLoginUseCase(
        google_repo=google_repo,
        verifier=verifier,
        token_service=token_service,
    )
