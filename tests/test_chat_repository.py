"""
Tests for the SQLAlchemy chat repository.
"""

import pytest
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from visionchat.domain.auth.entities import AccountType, utcnow
from visionchat.domain.chat.entities import Chat, ChatMessage, ChatOwner, MessageRole
from visionchat.infrastructure.chat.chat_repository import ChatRepositoryAdapter
from visionchat.infrastructure.database import chat_messages

ALICE = ChatOwner(user_id="u-1", user_type=AccountType.REGULAR)
ALICE_GOOGLE = ChatOwner(user_id="u-1", user_type=AccountType.GOOGLE)
BOB = ChatOwner(user_id="u-2", user_type=AccountType.REGULAR)


@pytest.fixture
def repo(engine) -> ChatRepositoryAdapter:
    return ChatRepositoryAdapter(engine)


def _exchange(question: str, answer: str) -> list[ChatMessage]:
    return [
        ChatMessage(role=MessageRole.USER, content=question),
        ChatMessage(role=MessageRole.ASSISTANT, content=answer),
    ]


class TestChatRepositoryAdapter:
    """Tests for ownership scoping and message ordering."""

    def test_add_and_get(self, repo) -> None:
        chat = Chat(owner=ALICE, title="New Chat")
        repo.add(chat)
        loaded = repo.get(ALICE, chat.chat_id)
        assert loaded is not None
        assert loaded.title == "New Chat"
        assert loaded.messages == []
        assert loaded.created_at.tzinfo is not None

    def test_foreign_chat_is_invisible(self, repo) -> None:
        """Same id with a different user or account type does not match."""
        chat = Chat(owner=ALICE, title="Mine")
        repo.add(chat)
        assert repo.get(BOB, chat.chat_id) is None
        assert repo.get(ALICE_GOOGLE, chat.chat_id) is None
        assert repo.rename(BOB, chat.chat_id, "Stolen") is None
        assert repo.delete(BOB, chat.chat_id) is False
        assert repo.get(ALICE, chat.chat_id).title == "Mine"

    def test_append_keeps_order_and_retitles(self, repo) -> None:
        chat = Chat(owner=ALICE, title="New Chat")
        repo.add(chat)
        repo.append_messages(ALICE, chat.chat_id, _exchange("q1", "a1"), new_title="Topic")
        repo.append_messages(ALICE, chat.chat_id, _exchange("q2", "a2"))

        loaded = repo.get(ALICE, chat.chat_id)
        assert loaded.title == "Topic"
        assert [m.content for m in loaded.messages] == ["q1", "a1", "q2", "a2"]
        assert [m.role for m in loaded.messages] == [
            MessageRole.USER,
            MessageRole.ASSISTANT,
            MessageRole.USER,
            MessageRole.ASSISTANT,
        ]

    def test_append_to_missing_chat_is_noop(self, repo) -> None:
        repo.append_messages(ALICE, "missing", _exchange("q", "a"))
        assert repo.get(ALICE, "missing") is None

    def test_list_newest_first(self, repo) -> None:
        """Listing is ordered by last update and scoped to the owner."""
        first = Chat(owner=ALICE, title="First")
        second = Chat(owner=ALICE, title="Second")
        repo.add(first)
        repo.add(second)
        repo.add(Chat(owner=BOB, title="Other"))
        repo.rename(ALICE, first.chat_id, "First again")

        titles = [s.title for s in repo.list_for_owner(ALICE, limit=50)]
        assert titles == ["First again", "Second"]
        assert len(repo.list_for_owner(ALICE, limit=1)) == 1

    def test_delete_removes_messages(self, repo) -> None:
        chat = Chat(owner=ALICE, title="Doomed")
        repo.add(chat)
        repo.append_messages(ALICE, chat.chat_id, _exchange("q", "a"))
        assert repo.delete(ALICE, chat.chat_id) is True
        assert repo.get(ALICE, chat.chat_id) is None
        assert repo.delete(ALICE, chat.chat_id) is False


class TestMessagePositions:
    """Positions are unique per chat and numbered without gaps."""

    def test_duplicate_position_rejected(self, engine, repo) -> None:
        chat = Chat(owner=ALICE, title="New Chat")
        repo.add(chat)
        repo.append_messages(ALICE, chat.chat_id, _exchange("q", "a"))
        row = {
            "chat_id": chat.chat_id,
            "position": 1,
            "role": "user",
            "content": "clash",
            "timestamp": utcnow(),
        }
        with pytest.raises(IntegrityError):
            with engine.begin() as conn:
                conn.execute(insert(chat_messages), [row])

    def test_repeated_appends_number_positions_contiguously(self, engine, repo) -> None:
        chat = Chat(owner=ALICE, title="New Chat")
        repo.add(chat)
        for turn in range(3):
            repo.append_messages(ALICE, chat.chat_id, _exchange(f"q{turn}", f"a{turn}"))

        with engine.connect() as conn:
            positions = conn.execute(
                select(chat_messages.c.position)
                .where(chat_messages.c.chat_id == chat.chat_id)
                .order_by(chat_messages.c.position)
            ).scalars().all()
        assert positions == list(range(6))
        assert [m.content for m in repo.get(ALICE, chat.chat_id).messages] == [
            "q0", "a0", "q1", "a1", "q2", "a2",
        ]
