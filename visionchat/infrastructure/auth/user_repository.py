"""
Adapter: Password account repository.

Implements UserRepository port.
Stores accounts in the users table.
"""

import logging
from typing import Any, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from visionchat.domain.auth.entities import User, utcnow
from visionchat.domain.auth.ports import UserRepository
from visionchat.infrastructure.database import as_utc, users

logger = logging.getLogger(__name__)


def _to_entity(row: Any) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        avatar=row.avatar,
        email_verified=bool(row.email_verified),
        email_verification_token=row.email_verification_token,
        token_expires=as_utc(row.token_expires),
        password_reset_token=row.password_reset_token,
        password_reset_expires=as_utc(row.password_reset_expires),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _to_row(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "password_hash": user.password_hash,
        "avatar": user.avatar,
        "email_verified": user.email_verified,
        "email_verification_token": user.email_verification_token,
        "token_expires": user.token_expires,
        "password_reset_token": user.password_reset_token,
        "password_reset_expires": user.password_reset_expires,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


class UserRepositoryAdapter(UserRepository):
    """Reads and writes password accounts through SQLAlchemy Core.

    Implements the UserRepository port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _get_one(self, *criteria: Any) -> Optional[User]:
        query = select(users).where(*criteria)
        with self._engine.connect() as conn:
            row = conn.execute(query).first()
        return _to_entity(row) if row is not None else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._get_one(users.c.id == user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one(users.c.email == email)

    def get_by_verification_token(self, token: str) -> Optional[User]:
        return self._get_one(users.c.email_verification_token == token)

    def get_by_reset_token(self, token: str) -> Optional[User]:
        return self._get_one(users.c.password_reset_token == token)

    def add(self, user: User) -> None:
        with self._engine.begin() as conn:
            conn.execute(insert(users).values(**_to_row(user)))

    def save(self, user: User) -> None:
        user.updated_at = utcnow()
        values = _to_row(user)
        values.pop("id")
        with self._engine.begin() as conn:
            conn.execute(update(users).where(users.c.id == user.id).values(**values))
