"""
Dependency injection shared by all bounded contexts.

Owns the database engine and the request authentication chain:
bearer token -> AuthenticateUseCase -> AuthenticatedUser.
Tests replace these through `app.dependency_overrides`.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Engine

from visionchat.application.auth.authenticate import AuthenticateUseCase
from visionchat.core.config import settings
from visionchat.domain.auth.entities import AuthenticatedUser
from visionchat.domain.auth.ports import GoogleUserRepository, TokenService, UserRepository
from visionchat.infrastructure.auth.google_user_repository import GoogleUserRepositoryAdapter
from visionchat.infrastructure.auth.jwt_token_service import JwtTokenService
from visionchat.infrastructure.auth.user_repository import UserRepositoryAdapter
from visionchat.infrastructure.database import build_engine

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Build the SQLAlchemy engine once from application settings."""
    return build_engine(settings.get_database_dsn())


def get_user_repository(engine: Engine = Depends(get_engine)) -> UserRepository:
    return UserRepositoryAdapter(engine)


def get_google_user_repository(
    engine: Engine = Depends(get_engine),
) -> GoogleUserRepository:
    return GoogleUserRepositoryAdapter(engine)


def get_token_service() -> TokenService:
    """Build the session token service from application settings."""
    return JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(days=settings.jwt_expire_days),
    )


def get_authenticate_use_case(
    token_service: TokenService = Depends(get_token_service),
    user_repo: UserRepository = Depends(get_user_repository),
    google_repo: GoogleUserRepository = Depends(get_google_user_repository),
) -> AuthenticateUseCase:
    return AuthenticateUseCase(
        token_service=token_service,
        user_repo=user_repo,
        google_repo=google_repo,
    )


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Return the raw bearer token, or None when the header is absent."""
    return credentials.credentials if credentials else None


def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    use_case: AuthenticateUseCase = Depends(get_authenticate_use_case),
) -> AuthenticatedUser:
    """Resolve the calling account; raises an auth domain error otherwise."""
    return use_case.execute(token)
