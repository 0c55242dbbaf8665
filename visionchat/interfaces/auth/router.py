"""
FastAPI router for the auth bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from visionchat.application.auth.authenticate import AuthenticateUseCase
from visionchat.application.auth.dtos import (
    AccountView,
    EmailCommand,
    GoogleLoginCommand,
    LoginCommand,
    MessageResult,
    ResetPasswordCommand,
    SessionResult,
    SignupCommand,
    TokenCheckResult,
    VerifyEmailCommand,
)
from visionchat.application.auth.forgot_password import ForgotPasswordUseCase
from visionchat.application.auth.google_login import GoogleLoginUseCase
from visionchat.application.auth.login import LoginUseCase
from visionchat.application.auth.resend_verification import ResendVerificationUseCase
from visionchat.application.auth.reset_password import ResetPasswordUseCase
from visionchat.application.auth.signup import SignupUseCase
from visionchat.application.auth.verify_email import VerifyEmailUseCase
from visionchat.interfaces.auth.dependencies import (
    get_forgot_password_use_case,
    get_google_login_use_case,
    get_login_use_case,
    get_resend_verification_use_case,
    get_reset_password_use_case,
    get_signup_use_case,
    get_verify_email_use_case,
)
from visionchat.interfaces.auth.schemas import (
    AccountSchema,
    EmailRequest,
    GoogleLoginRequest,
    LoginRequest,
    OutcomeResponse,
    ProfileResponse,
    ResetPasswordRequest,
    SessionResponse,
    SignupRequest,
    SignupResponse,
    TokenCheckResponse,
    TokenOwnerSchema,
    TokenRequest,
    VerifyEmailResponse,
)
from visionchat.interfaces.dependencies import get_authenticate_use_case, get_bearer_token
from visionchat.interfaces.schemas import ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _account(view: AccountView) -> AccountSchema:
    return AccountSchema(
        id=view.id,
        name=view.name,
        email=view.email,
        avatar=view.avatar,
        type=view.type,
        created_at=view.created_at,
        email_verified=view.email_verified,
        verified=view.verified,
    )


def _session(result: SessionResult) -> SessionResponse:
    return SessionResponse(message=result.message, token=result.token, user=_account(result.user))


def _token_check(result: TokenCheckResult) -> TokenCheckResponse:
    owner = None
    if result.name is not None and result.email is not None:
        owner = TokenOwnerSchema(name=result.name, email=result.email)
    return TokenCheckResponse(
        message=result.message, valid=result.valid, verified=result.verified, user=owner
    )


def _outcome(result: MessageResult) -> OutcomeResponse:
    return OutcomeResponse(message=result.message, email_sent=result.email_sent)


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": SignupResponse}, 409: {"model": ErrorResponse}},
    summary="Create a password account",
    description=(
        "Creates an unverified account and emails a verification link. "
        "Signing up again with an unverified email refreshes that account (200)."
    ),
)
def signup(
    response: Response,
    body: SignupRequest,
    use_case: SignupUseCase = Depends(get_signup_use_case),
) -> SignupResponse:
    result = use_case.execute(
        SignupCommand(name=body.name, email=body.email, password=body.password)
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return SignupResponse(
        message=result.message,
        email_sent=result.email_sent,
        requires_verification=result.requires_verification,
    )


@router.post(
    "/login",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Log in with email and password",
)
def login(
    body: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> SessionResponse:
    return _session(use_case.execute(LoginCommand(email=body.email, password=body.password)))


@router.post(
    "/verify-email",
    response_model=VerifyEmailResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Verify an email address",
)
def verify_email(
    body: TokenRequest,
    use_case: VerifyEmailUseCase = Depends(get_verify_email_use_case),
) -> VerifyEmailResponse:
    result = use_case.execute(VerifyEmailCommand(token=body.token))
    return VerifyEmailResponse(
        message=result.message, verified=result.verified, user=_account(result.user)
    )


@router.get(
    "/verify-email",
    response_model=TokenCheckResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Check a verification link",
)
def check_verification_token(
    token: str = Query(..., min_length=1),
    use_case: VerifyEmailUseCase = Depends(get_verify_email_use_case),
) -> TokenCheckResponse:
    return _token_check(use_case.check(VerifyEmailCommand(token=token)))


@router.post(
    "/resend-verification",
    response_model=OutcomeResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Send a new verification email",
)
def resend_verification(
    body: EmailRequest,
    use_case: ResendVerificationUseCase = Depends(get_resend_verification_use_case),
) -> OutcomeResponse:
    return _outcome(use_case.execute(EmailCommand(email=body.email)))


@router.post(
    "/forgot-password",
    response_model=OutcomeResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Email a password reset link",
)
def forgot_password(
    body: EmailRequest,
    use_case: ForgotPasswordUseCase = Depends(get_forgot_password_use_case),
) -> OutcomeResponse:
    return _outcome(use_case.execute(EmailCommand(email=body.email)))


@router.post(
    "/reset-password",
    response_model=OutcomeResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Set a new password with a reset token",
)
def reset_password(
    body: ResetPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
) -> OutcomeResponse:
    return _outcome(
        use_case.execute(ResetPasswordCommand(token=body.token, password=body.password))
    )


@router.get(
    "/reset-password",
    response_model=TokenCheckResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Check a password reset link",
)
def check_reset_token(
    token: str = Query(..., min_length=1),
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
) -> TokenCheckResponse:
    return _token_check(use_case.check(token))


@router.post(
    "/google",
    response_model=SessionResponse,
    response_model_exclude_none=True,
    responses={401: {"model": ErrorResponse}},
    summary="Sign in with a Google ID token",
)
def google_login(
    body: GoogleLoginRequest,
    use_case: GoogleLoginUseCase = Depends(get_google_login_use_case),
) -> SessionResponse:
    return _session(use_case.execute(GoogleLoginCommand(credential=body.credential)))


@router.get(
    "/me",
    response_model=ProfileResponse,
    response_model_exclude_none=True,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Profile of the calling account",
)
def me(
    token: Optional[str] = Depends(get_bearer_token),
    use_case: AuthenticateUseCase = Depends(get_authenticate_use_case),
) -> ProfileResponse:
    return ProfileResponse(user=_account(use_case.profile(token)))
