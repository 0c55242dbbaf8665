"""
Shared pytest fixtures.
"""

from datetime import timedelta

import pytest

from fakes import PlainHasher, RecordingEmailSender
from visionchat.infrastructure.auth.jwt_token_service import JwtTokenService
from visionchat.infrastructure.database import build_engine, create_schema
from visionchat.shared.security.rate_limiting import limiter


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Start every test with empty rate-limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def engine():
    """In-memory SQLite engine with the full schema."""
    eng = build_engine("sqlite:///:memory:")
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def hasher() -> PlainHasher:
    return PlainHasher()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(secret="test-secret", algorithm="HS256", lifetime=timedelta(days=7))
