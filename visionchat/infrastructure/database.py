"""
Database schema and engine construction.

All tables live on one MetaData so start-up can create them in a single
call. Timestamps are stored as UTC; SQLite hands them back without tzinfo,
so readers pass them through `as_utc`.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    create_engine,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("avatar", String(500)),
    Column("email_verified", Boolean, nullable=False, default=False),
    Column("email_verification_token", String(128), index=True),
    Column("token_expires", DateTime(timezone=True)),
    Column("password_reset_token", String(128), index=True),
    Column("password_reset_expires", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

google_users = Table(
    "google_users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("google_id", String(255), nullable=False, unique=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("avatar", String(500), nullable=False),
    Column("verified", Boolean, nullable=False, default=True),
    Column("locale", String(16), nullable=False, default="en"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

chats = Table(
    "chats",
    metadata,
    Column("chat_id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False, index=True),
    Column("user_type", String(16), nullable=False),
    Column("title", String(100), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Index("ix_chats_owner_updated", "user_id", "user_type", "updated_at"),
)

chat_messages = Table(
    "chat_messages",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "chat_id",
        String(36),
        ForeignKey("chats.chat_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("position", Integer, nullable=False),
    Column("role", String(16), nullable=False),
    Column("content", Text, nullable=False),
    Column("timestamp", DateTime(timezone=True), nullable=False),
    UniqueConstraint("chat_id", "position", name="uq_chat_messages_position"),
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from the database."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def build_engine(dsn: str) -> Engine:
    """Build a SQLAlchemy engine for a DSN.

    In-memory SQLite gets a StaticPool so every connection sees the
    same database.
    """
    if dsn.startswith("sqlite") and ":memory:" in dsn:
        return create_engine(
            dsn,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if dsn.startswith("sqlite"):
        return create_engine(dsn, connect_args={"check_same_thread": False})
    return create_engine(dsn, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    metadata.create_all(engine)
    logger.info("Database schema ready.")


def ping_database(engine: Engine) -> bool:
    """Return True when a trivial query succeeds."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database ping failed: %s", type(exc).__name__)
        return False
    return True
