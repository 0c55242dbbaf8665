"""
Adapter: Chat repository.

Implements ChatRepository port.
Chats live in the chats table; messages in chat_messages, ordered by position.
"""

import logging
from typing import Any, Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.engine import Connection, Engine

from visionchat.domain.auth.entities import AccountType, utcnow
from visionchat.domain.chat.entities import (
    Chat,
    ChatMessage,
    ChatOwner,
    ChatSummary,
    MessageRole,
)
from visionchat.domain.chat.ports import ChatRepository
from visionchat.infrastructure.database import as_utc, chat_messages, chats

logger = logging.getLogger(__name__)


def _owned(owner: ChatOwner, chat_id: str) -> Any:
    return and_(
        chats.c.chat_id == chat_id,
        chats.c.user_id == owner.user_id,
        chats.c.user_type == owner.user_type.value,
    )


def _to_chat(row: Any, messages: list[ChatMessage]) -> Chat:
    return Chat(
        owner=ChatOwner(user_id=row.user_id, user_type=AccountType(row.user_type)),
        title=row.title,
        chat_id=row.chat_id,
        messages=messages,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class ChatRepositoryAdapter(ChatRepository):
    """Reads and writes chats through SQLAlchemy Core.

    Implements the ChatRepository port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_for_owner(self, owner: ChatOwner, limit: int) -> list[ChatSummary]:
        query = (
            select(chats.c.chat_id, chats.c.title, chats.c.created_at, chats.c.updated_at)
            .where(
                chats.c.user_id == owner.user_id,
                chats.c.user_type == owner.user_type.value,
            )
            .order_by(chats.c.updated_at.desc())
            .limit(limit)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()

        return [
            ChatSummary(
                chat_id=row.chat_id,
                title=row.title,
                created_at=as_utc(row.created_at),
                updated_at=as_utc(row.updated_at),
            )
            for row in rows
        ]

    def get(self, owner: ChatOwner, chat_id: str) -> Optional[Chat]:
        with self._engine.connect() as conn:
            row = conn.execute(select(chats).where(_owned(owner, chat_id))).first()
            if row is None:
                return None
            message_rows = conn.execute(
                select(chat_messages)
                .where(chat_messages.c.chat_id == chat_id)
                .order_by(chat_messages.c.position)
            ).fetchall()

        messages = [
            ChatMessage(
                role=MessageRole(m.role),
                content=m.content,
                timestamp=as_utc(m.timestamp),
            )
            for m in message_rows
        ]
        return _to_chat(row, messages)

    def add(self, chat: Chat) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(chats).values(
                    chat_id=chat.chat_id,
                    user_id=chat.owner.user_id,
                    user_type=chat.owner.user_type.value,
                    title=chat.title,
                    created_at=chat.created_at,
                    updated_at=chat.updated_at,
                )
            )
            self._insert_messages(conn, chat.chat_id, chat.messages, start=0)

    def rename(self, owner: ChatOwner, chat_id: str, title: str) -> Optional[Chat]:
        with self._engine.begin() as conn:
            result = conn.execute(
                update(chats)
                .where(_owned(owner, chat_id))
                .values(title=title, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = conn.execute(select(chats).where(_owned(owner, chat_id))).first()
        return _to_chat(row, [])

    def delete(self, owner: ChatOwner, chat_id: str) -> bool:
        with self._engine.begin() as conn:
            owned = conn.execute(
                select(chats.c.chat_id).where(_owned(owner, chat_id))
            ).first()
            if owned is None:
                return False
            conn.execute(delete(chat_messages).where(chat_messages.c.chat_id == chat_id))
            conn.execute(delete(chats).where(chats.c.chat_id == chat_id))
        return True

    def append_messages(
        self,
        owner: ChatOwner,
        chat_id: str,
        messages: list[ChatMessage],
        new_title: Optional[str] = None,
    ) -> None:
        values: dict[str, Any] = {"updated_at": utcnow()}
        if new_title is not None:
            values["title"] = new_title

        with self._engine.begin() as conn:
            result = conn.execute(update(chats).where(_owned(owner, chat_id)).values(**values))
            if result.rowcount == 0:
                logger.warning("Chat %s vanished before messages were stored", chat_id)
                return
            # The chat-row UPDATE holds that row's write lock until commit, so
            # appends to one chat are serialized before the next position is read.
            start = conn.execute(
                select(func.coalesce(func.max(chat_messages.c.position) + 1, 0)).where(
                    chat_messages.c.chat_id == chat_id
                )
            ).scalar_one()
            self._insert_messages(conn, chat_id, messages, start=start)

    @staticmethod
    def _insert_messages(
        conn: Connection, chat_id: str, messages: list[ChatMessage], start: int
    ) -> None:
        if not messages:
            return
        conn.execute(
            insert(chat_messages),
            [
                {
                    "chat_id": chat_id,
                    "position": start + offset,
                    "role": m.role.value,
                    "content": m.content,
                    "timestamp": m.timestamp,
                }
                for offset, m in enumerate(messages)
            ],
        )
