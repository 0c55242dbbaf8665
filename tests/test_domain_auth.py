"""
Tests for auth domain rules and the token / hashing adapters.
"""

from datetime import timedelta

import jwt

from visionchat.domain.auth.entities import AccountType, TokenPayload, User, utcnow
from visionchat.domain.auth.tokens import (
    generate_one_shot_token,
    password_reset_url,
    token_expiry,
    verification_url,
)
from visionchat.infrastructure.auth.jwt_token_service import JwtTokenService
from visionchat.infrastructure.auth.password_hasher import BcryptPasswordHasher


class TestOneShotTokens:
    """Tests for verification / reset token helpers."""

    def test_token_is_64_hex_chars(self) -> None:
        """Tokens are 32 random bytes rendered as hex."""
        token = generate_one_shot_token()
        assert len(token) == 64
        int(token, 16)

    def test_tokens_are_unique(self) -> None:
        """Two tokens never collide in practice."""
        assert generate_one_shot_token() != generate_one_shot_token()

    def test_links_point_at_site(self) -> None:
        """Links carry the token as a query parameter on the site URL."""
        assert (
            verification_url("https://app.example/", "abc")
            == "https://app.example/auth/verify-email?token=abc"
        )
        assert (
            password_reset_url("https://app.example", "abc")
            == "https://app.example/auth/reset-password?token=abc"
        )

    def test_expiry_adds_lifetime(self) -> None:
        now = utcnow()
        assert token_expiry(now, timedelta(hours=24)) == now + timedelta(hours=24)


class TestUserEntity:
    """Tests for User token bookkeeping."""

    def _user(self) -> User:
        return User(name="Ada", email="ada@example.com", password_hash="h")

    def test_verification_token_liveness(self) -> None:
        """A token is live only before its expiry."""
        user = self._user()
        now = utcnow()
        assert not user.verification_token_is_live(now)
        user.issue_verification_token("t", now + timedelta(minutes=1))
        assert user.verification_token_is_live(now)
        assert not user.verification_token_is_live(now + timedelta(minutes=2))

    def test_mark_verified_clears_token(self) -> None:
        user = self._user()
        user.issue_verification_token("t", utcnow() + timedelta(hours=1))
        user.mark_verified()
        assert user.email_verified is True
        assert user.email_verification_token is None
        assert user.token_expires is None

    def test_change_password_burns_reset_token(self) -> None:
        """Setting a new password invalidates the pending reset link."""
        user = self._user()
        user.issue_reset_token("r", utcnow() + timedelta(hours=1))
        user.change_password("new-hash")
        assert user.password_hash == "new-hash"
        assert user.password_reset_token is None
        assert not user.reset_token_is_live(utcnow())


class TestJwtTokenService:
    """Tests for session token signing and verification."""

    def test_round_trip_claims(self, token_service: JwtTokenService) -> None:
        """A signed token verifies back to the same payload."""
        payload = TokenPayload(user_id="u1", email="a@b.c", type=AccountType.GOOGLE)
        assert token_service.verify(token_service.sign(payload)) == payload

    def test_claim_names(self, token_service: JwtTokenService) -> None:
        """Tokens carry userId, email, type and exp claims."""
        token = token_service.sign(
            TokenPayload(user_id="u1", email="a@b.c", type=AccountType.REGULAR)
        )
        claims = jwt.decode(token, "test-secret", algorithms=["HS256"])
        assert claims["userId"] == "u1"
        assert claims["email"] == "a@b.c"
        assert claims["type"] == "regular"
        assert "exp" in claims

    def test_wrong_secret_rejected(self, token_service: JwtTokenService) -> None:
        other = JwtTokenService(secret="other-secret")
        token = other.sign(TokenPayload(user_id="u1", email="a@b.c", type=AccountType.REGULAR))
        assert token_service.verify(token) is None

    def test_expired_token_rejected(self) -> None:
        """Tokens past their lifetime verify to None."""
        service = JwtTokenService(secret="s", lifetime=timedelta(seconds=-10))
        token = service.sign(TokenPayload(user_id="u1", email="a@b.c", type=AccountType.REGULAR))
        assert service.verify(token) is None

    def test_malformed_token_rejected(self, token_service: JwtTokenService) -> None:
        assert token_service.verify("not-a-jwt") is None

    def test_missing_claims_rejected(self, token_service: JwtTokenService) -> None:
        """A validly signed token without our claims is not a session."""
        token = jwt.encode(
            {"sub": "x", "exp": utcnow() + timedelta(hours=1)}, "test-secret", algorithm="HS256"
        )
        assert token_service.verify(token) is None


class TestBcryptPasswordHasher:
    """Tests for password hashing."""

    def test_hash_and_verify(self) -> None:
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash("secret123")
        assert hashed != "secret123"
        assert hasher.verify("secret123", hashed)
        assert not hasher.verify("wrong", hashed)

    def test_garbage_hash_does_not_verify(self) -> None:
        """A corrupt stored hash is a failed login, not a crash."""
        assert not BcryptPasswordHasher(rounds=4).verify("secret123", "not-a-bcrypt-hash")
