"""
Tests for the auth application layer (use cases).

Use cases run against SQLite-backed repositories with fake hashing,
email delivery and Google verification.
"""

from datetime import timedelta

import pytest

from fakes import FakeGoogleVerifier, PlainHasher, RecordingEmailSender
from visionchat.application.auth.authenticate import AuthenticateUseCase
from visionchat.application.auth.dtos import (
    EmailCommand,
    GoogleLoginCommand,
    LoginCommand,
    ResetPasswordCommand,
    SignupCommand,
    VerifyEmailCommand,
)
from visionchat.application.auth.forgot_password import (
    UNKNOWN_EMAIL_MESSAGE,
    ForgotPasswordUseCase,
)
from visionchat.application.auth.google_login import GoogleLoginUseCase
from visionchat.application.auth.login import LoginUseCase
from visionchat.application.auth.resend_verification import ResendVerificationUseCase
from visionchat.application.auth.reset_password import ResetPasswordUseCase
from visionchat.application.auth.signup import SignupUseCase
from visionchat.application.auth.verify_email import VerifyEmailUseCase
from visionchat.domain.auth.entities import AccountType, GoogleIdentity, TokenPayload, utcnow
from visionchat.domain.auth.errors import (
    AccountNotFoundError,
    AlreadyVerifiedError,
    AuthenticationRequiredError,
    EmailAlreadyRegisteredError,
    EmailDeliveryError,
    GoogleAuthError,
    InvalidCredentialsError,
    InvalidSessionError,
    InvalidTokenError,
    LoginNotVerifiedError,
    ResetNotVerifiedError,
    UserNotFoundError,
    WeakPasswordError,
)
from visionchat.infrastructure.auth.google_user_repository import GoogleUserRepositoryAdapter
from visionchat.infrastructure.auth.user_repository import UserRepositoryAdapter

SITE = "http://localhost:3000"
DAY = timedelta(hours=24)


@pytest.fixture
def users(engine) -> UserRepositoryAdapter:
    return UserRepositoryAdapter(engine)


@pytest.fixture
def google_users(engine) -> GoogleUserRepositoryAdapter:
    return GoogleUserRepositoryAdapter(engine)


def _signup(users, hasher, sender) -> SignupUseCase:
    return SignupUseCase(users, hasher, sender, SITE, DAY, password_min_length=6)


def _register_verified(users, hasher, sender, email="ada@example.com", password="secret1"):
    """Sign up and verify an account; return its id."""
    _signup(users, hasher, sender).execute(
        SignupCommand(name="Ada", email=email, password=password)
    )
    token = RecordingEmailSender.token_of(sender.verification_links[-1][1])
    result = VerifyEmailUseCase(users).execute(VerifyEmailCommand(token=token))
    return result.user.id


class TestSignupUseCase:
    """Tests for SignupUseCase."""

    def test_new_account_is_unverified_and_mailed(self, users, hasher, email_sender) -> None:
        """A new signup creates an unverified account and sends one link."""
        result = _signup(users, hasher, email_sender).execute(
            SignupCommand(name="  Ada  ", email="  Ada@Example.COM ", password="secret1")
        )
        assert result.created is True
        assert result.requires_verification is True

        stored = users.get_by_email("ada@example.com")
        assert stored is not None
        assert stored.name == "Ada"
        assert stored.email_verified is False
        assert stored.password_hash == "hashed:secret1"
        assert stored.token_expires is not None and stored.token_expires > utcnow()

        to, link = email_sender.verification_links[0]
        assert to == "ada@example.com"
        assert link == f"{SITE}/auth/verify-email?token={stored.email_verification_token}"

    def test_short_password_rejected(self, users, hasher, email_sender) -> None:
        with pytest.raises(WeakPasswordError):
            _signup(users, hasher, email_sender).execute(
                SignupCommand(name="Ada", email="ada@example.com", password="12345")
            )
        assert users.get_by_email("ada@example.com") is None

    def test_unverified_account_is_refreshed(self, users, hasher, email_sender) -> None:
        """Signing up again before verifying updates name, password and token."""
        use_case = _signup(users, hasher, email_sender)
        use_case.execute(SignupCommand(name="Ada", email="ada@example.com", password="secret1"))
        first_token = users.get_by_email("ada@example.com").email_verification_token

        result = use_case.execute(
            SignupCommand(name="Ada L", email="ada@example.com", password="secret2")
        )
        assert result.created is False

        stored = users.get_by_email("ada@example.com")
        assert stored.name == "Ada L"
        assert stored.password_hash == "hashed:secret2"
        assert stored.email_verification_token != first_token
        assert len(email_sender.verification_links) == 2

    def test_verified_email_conflicts(self, users, hasher, email_sender) -> None:
        _register_verified(users, hasher, email_sender)
        with pytest.raises(EmailAlreadyRegisteredError):
            _signup(users, hasher, email_sender).execute(
                SignupCommand(name="Eve", email="ada@example.com", password="secret9")
            )

    def test_email_failure_raises(self, users, hasher) -> None:
        """The account is kept but the caller learns the mail did not go out."""
        sender = RecordingEmailSender(succeed=False)
        with pytest.raises(EmailDeliveryError):
            _signup(users, hasher, sender).execute(
                SignupCommand(name="Ada", email="ada@example.com", password="secret1")
            )
        assert users.get_by_email("ada@example.com") is not None


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    def test_verified_login_returns_session(
        self, users, hasher, email_sender, token_service
    ) -> None:
        user_id = _register_verified(users, hasher, email_sender)
        result = LoginUseCase(users, hasher, token_service).execute(
            LoginCommand(email="ADA@example.com", password="secret1")
        )
        assert result.user.id == user_id
        assert result.user.type == "regular"
        assert result.user.email_verified is True
        payload = token_service.verify(result.token)
        assert payload == TokenPayload(
            user_id=user_id, email="ada@example.com", type=AccountType.REGULAR
        )

    def test_unknown_email_and_wrong_password_look_alike(
        self, users, hasher, email_sender, token_service
    ) -> None:
        """Both failures raise the same error with the same message."""
        _register_verified(users, hasher, email_sender)
        use_case = LoginUseCase(users, hasher, token_service)
        with pytest.raises(InvalidCredentialsError) as unknown:
            use_case.execute(LoginCommand(email="nobody@example.com", password="secret1"))
        with pytest.raises(InvalidCredentialsError) as wrong:
            use_case.execute(LoginCommand(email="ada@example.com", password="nope"))
        assert unknown.value.message == wrong.value.message

    def test_unverified_login_refused(self, users, hasher, email_sender, token_service) -> None:
        _signup(users, hasher, email_sender).execute(
            SignupCommand(name="Ada", email="ada@example.com", password="secret1")
        )
        with pytest.raises(LoginNotVerifiedError):
            LoginUseCase(users, hasher, token_service).execute(
                LoginCommand(email="ada@example.com", password="secret1")
            )


class TestVerifyEmailUseCase:
    """Tests for VerifyEmailUseCase."""

    def _pending_token(self, users, hasher, sender) -> str:
        _signup(users, hasher, sender).execute(
            SignupCommand(name="Ada", email="ada@example.com", password="secret1")
        )
        return RecordingEmailSender.token_of(sender.verification_links[-1][1])

    def test_verify_marks_account(self, users, hasher, email_sender) -> None:
        token = self._pending_token(users, hasher, email_sender)
        result = VerifyEmailUseCase(users).execute(VerifyEmailCommand(token=token))
        assert result.verified is True
        stored = users.get_by_email("ada@example.com")
        assert stored.email_verified is True
        assert stored.email_verification_token is None

    def test_token_is_single_use(self, users, hasher, email_sender) -> None:
        token = self._pending_token(users, hasher, email_sender)
        use_case = VerifyEmailUseCase(users)
        use_case.execute(VerifyEmailCommand(token=token))
        with pytest.raises(InvalidTokenError):
            use_case.execute(VerifyEmailCommand(token=token))

    def test_expired_token_rejected(self, users, hasher, email_sender) -> None:
        """Tokens past their expiry are refused even though they are stored."""
        token = self._pending_token(users, hasher, email_sender)
        user = users.get_by_email("ada@example.com")
        user.issue_verification_token(token, utcnow() - timedelta(minutes=1))
        users.save(user)
        with pytest.raises(InvalidTokenError):
            VerifyEmailUseCase(users).execute(VerifyEmailCommand(token=token))

    def test_check_reports_pending_owner(self, users, hasher, email_sender) -> None:
        """Checking a link does not consume it."""
        token = self._pending_token(users, hasher, email_sender)
        use_case = VerifyEmailUseCase(users)
        result = use_case.check(VerifyEmailCommand(token=token))
        assert result.valid is True
        assert result.verified is False
        assert (result.name, result.email) == ("Ada", "ada@example.com")
        assert users.get_by_email("ada@example.com").email_verified is False

    def test_unknown_token_rejected(self, users) -> None:
        with pytest.raises(InvalidTokenError):
            VerifyEmailUseCase(users).check(VerifyEmailCommand(token="0" * 64))


class TestResendVerificationUseCase:
    """Tests for ResendVerificationUseCase."""

    def test_resend_issues_new_token(self, users, hasher, email_sender) -> None:
        _signup(users, hasher, email_sender).execute(
            SignupCommand(name="Ada", email="ada@example.com", password="secret1")
        )
        old = users.get_by_email("ada@example.com").email_verification_token
        result = ResendVerificationUseCase(users, email_sender, SITE, DAY).execute(
            EmailCommand(email="ada@example.com")
        )
        assert result.email_sent is True
        assert users.get_by_email("ada@example.com").email_verification_token != old
        assert len(email_sender.verification_links) == 2

    def test_unknown_email(self, users, email_sender) -> None:
        with pytest.raises(AccountNotFoundError):
            ResendVerificationUseCase(users, email_sender, SITE, DAY).execute(
                EmailCommand(email="nobody@example.com")
            )

    def test_already_verified(self, users, hasher, email_sender) -> None:
        _register_verified(users, hasher, email_sender)
        with pytest.raises(AlreadyVerifiedError):
            ResendVerificationUseCase(users, email_sender, SITE, DAY).execute(
                EmailCommand(email="ada@example.com")
            )


class TestPasswordResetFlow:
    """Tests for ForgotPasswordUseCase and ResetPasswordUseCase."""

    def test_unknown_email_gets_generic_answer(self, users, email_sender) -> None:
        """The answer does not reveal whether the address is registered."""
        result = ForgotPasswordUseCase(users, email_sender, SITE, DAY).execute(
            EmailCommand(email="nobody@example.com")
        )
        assert result.message == UNKNOWN_EMAIL_MESSAGE
        assert email_sender.reset_links == []

    def test_unverified_account_cannot_reset(self, users, hasher, email_sender) -> None:
        _signup(users, hasher, email_sender).execute(
            SignupCommand(name="Ada", email="ada@example.com", password="secret1")
        )
        with pytest.raises(ResetNotVerifiedError):
            ForgotPasswordUseCase(users, email_sender, SITE, DAY).execute(
                EmailCommand(email="ada@example.com")
            )

    def test_full_reset(self, users, hasher, email_sender, token_service) -> None:
        """A mailed reset token sets a new password exactly once."""
        _register_verified(users, hasher, email_sender)
        ForgotPasswordUseCase(users, email_sender, SITE, DAY).execute(
            EmailCommand(email="ada@example.com")
        )
        to, link = email_sender.reset_links[0]
        assert to == "ada@example.com"
        assert link.startswith(f"{SITE}/auth/reset-password?token=")
        token = RecordingEmailSender.token_of(link)

        reset = ResetPasswordUseCase(users, hasher, password_min_length=6)
        check = reset.check(token)
        assert check.valid is True
        assert check.email == "ada@example.com"

        reset.execute(ResetPasswordCommand(token=token, password="brand-new"))
        login = LoginUseCase(users, hasher, token_service)
        assert login.execute(LoginCommand(email="ada@example.com", password="brand-new")).token
        with pytest.raises(InvalidCredentialsError):
            login.execute(LoginCommand(email="ada@example.com", password="secret1"))
        with pytest.raises(InvalidTokenError):
            reset.execute(ResetPasswordCommand(token=token, password="another1"))

    def test_short_new_password_rejected(self, users, hasher) -> None:
        with pytest.raises(WeakPasswordError):
            ResetPasswordUseCase(users, hasher, password_min_length=6).execute(
                ResetPasswordCommand(token="whatever", password="123")
            )


class TestGoogleLoginUseCase:
    """Tests for GoogleLoginUseCase."""

    def _identity(self, **overrides) -> GoogleIdentity:
        values = dict(
            google_id="g-1",
            email="Grace@Example.com",
            email_verified=True,
            name="Grace",
            picture="https://img.example/grace.png",
            locale="fr",
        )
        values.update(overrides)
        return GoogleIdentity(**values)

    def test_first_login_creates_account(self, google_users, token_service) -> None:
        verifier = FakeGoogleVerifier({"cred": self._identity()})
        result = GoogleLoginUseCase(google_users, verifier, token_service).execute(
            GoogleLoginCommand(credential="cred")
        )
        assert result.user.type == "google"
        assert result.user.verified is True
        assert result.user.email == "grace@example.com"
        stored = google_users.get_by_google_id("g-1")
        assert stored.locale == "fr"
        assert token_service.verify(result.token).type is AccountType.GOOGLE

    def test_second_login_updates_profile(self, google_users, token_service) -> None:
        verifier = FakeGoogleVerifier({"cred": self._identity()})
        use_case = GoogleLoginUseCase(google_users, verifier, token_service)
        first = use_case.execute(GoogleLoginCommand(credential="cred"))

        verifier.identities["cred"] = self._identity(name="Grace H", picture=None)
        second = use_case.execute(GoogleLoginCommand(credential="cred"))
        assert second.user.id == first.user.id
        assert second.user.name == "Grace H"
        assert second.user.avatar == "https://img.example/grace.png"

    def test_changed_email_stored_lowercase(self, google_users, token_service) -> None:
        verifier = FakeGoogleVerifier({"cred": self._identity()})
        use_case = GoogleLoginUseCase(google_users, verifier, token_service)
        use_case.execute(GoogleLoginCommand(credential="cred"))

        verifier.identities["cred"] = self._identity(email=" Grace.Hopper@Example.COM ")
        result = use_case.execute(GoogleLoginCommand(credential="cred"))
        assert result.user.email == "grace.hopper@example.com"
        assert google_users.get_by_google_id("g-1").email == "grace.hopper@example.com"
        assert token_service.verify(result.token).email == "grace.hopper@example.com"

    def test_defaults_for_sparse_profile(self, google_users, token_service) -> None:
        """Missing name and picture fall back to defaults."""
        verifier = FakeGoogleVerifier(
            {"cred": self._identity(name=None, picture=None, locale=None)}
        )
        result = GoogleLoginUseCase(google_users, verifier, token_service).execute(
            GoogleLoginCommand(credential="cred")
        )
        assert result.user.name == "Google User"
        assert result.user.avatar.startswith("https://ui-avatars.com/api/?name=User")
        assert google_users.get_by_google_id("g-1").locale == "en"

    def test_unverified_google_email_rejected(self, google_users, token_service) -> None:
        verifier = FakeGoogleVerifier({"cred": self._identity(email_verified=False)})
        with pytest.raises(GoogleAuthError):
            GoogleLoginUseCase(google_users, verifier, token_service).execute(
                GoogleLoginCommand(credential="cred")
            )

    def test_bad_credential_rejected(self, google_users, token_service) -> None:
        with pytest.raises(GoogleAuthError):
            GoogleLoginUseCase(google_users, FakeGoogleVerifier(), token_service).execute(
                GoogleLoginCommand(credential="forged")
            )


class TestAuthenticateUseCase:
    """Tests for AuthenticateUseCase."""

    def test_missing_token(self, users, google_users, token_service) -> None:
        with pytest.raises(AuthenticationRequiredError):
            AuthenticateUseCase(token_service, users, google_users).execute(None)

    def test_invalid_token(self, users, google_users, token_service) -> None:
        with pytest.raises(InvalidSessionError):
            AuthenticateUseCase(token_service, users, google_users).execute("garbage")

    def test_token_for_deleted_account(self, users, google_users, token_service) -> None:
        token = token_service.sign(
            TokenPayload(user_id="gone", email="x@y.z", type=AccountType.REGULAR)
        )
        with pytest.raises(UserNotFoundError):
            AuthenticateUseCase(token_service, users, google_users).execute(token)

    def test_token_type_selects_store(self, users, google_users, token_service) -> None:
        """A regular id presented with a google-typed token is not found."""
        hasher = PlainHasher()
        user_id = _register_verified(users, hasher, RecordingEmailSender())
        use_case = AuthenticateUseCase(token_service, users, google_users)

        regular = token_service.sign(
            TokenPayload(user_id=user_id, email="ada@example.com", type=AccountType.REGULAR)
        )
        assert use_case.execute(regular).type is AccountType.REGULAR
        profile = use_case.profile(regular)
        assert profile.email_verified is None
        assert profile.type == "regular"

        google = token_service.sign(
            TokenPayload(user_id=user_id, email="ada@example.com", type=AccountType.GOOGLE)
        )
        with pytest.raises(UserNotFoundError):
            use_case.execute(google)
