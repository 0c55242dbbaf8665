"""
Adapter: Google account repository.

Implements GoogleUserRepository port.
Google accounts are kept apart from password accounts in google_users.
"""

from typing import Any, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from visionchat.domain.auth.entities import GoogleUser, utcnow
from visionchat.domain.auth.ports import GoogleUserRepository
from visionchat.infrastructure.database import as_utc, google_users


def _to_entity(row: Any) -> GoogleUser:
    return GoogleUser(
        id=row.id,
        google_id=row.google_id,
        name=row.name,
        email=row.email,
        avatar=row.avatar,
        verified=bool(row.verified),
        locale=row.locale,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class GoogleUserRepositoryAdapter(GoogleUserRepository):
    """Reads and writes Google accounts through SQLAlchemy Core."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _get_one(self, criterion: Any) -> Optional[GoogleUser]:
        with self._engine.connect() as conn:
            row = conn.execute(select(google_users).where(criterion)).first()
        return _to_entity(row) if row is not None else None

    def get_by_id(self, user_id: str) -> Optional[GoogleUser]:
        return self._get_one(google_users.c.id == user_id)

    def get_by_google_id(self, google_id: str) -> Optional[GoogleUser]:
        return self._get_one(google_users.c.google_id == google_id)

    def add(self, user: GoogleUser) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(google_users).values(
                    id=user.id,
                    google_id=user.google_id,
                    name=user.name,
                    email=user.email,
                    avatar=user.avatar,
                    verified=user.verified,
                    locale=user.locale,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
            )

    def save(self, user: GoogleUser) -> None:
        user.updated_at = utcnow()
        with self._engine.begin() as conn:
            conn.execute(
                update(google_users)
                .where(google_users.c.id == user.id)
                .values(
                    name=user.name,
                    email=user.email,
                    avatar=user.avatar,
                    verified=user.verified,
                    locale=user.locale,
                    updated_at=user.updated_at,
                )
            )
