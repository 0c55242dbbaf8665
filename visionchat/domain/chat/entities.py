"""
Domain entities for the chat bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from visionchat.domain.auth.entities import AccountType, utcnow

TITLE_MAX_LENGTH = 100


class MessageRole(Enum):
    """Author of a stored chat message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatOwner:
    """The account a chat belongs to. Both parts must match on every lookup."""

    user_id: str
    user_type: AccountType


@dataclass(frozen=True)
class ChatMessage:
    """A single stored message."""

    role: MessageRole
    content: str
    timestamp: datetime = field(default_factory=utcnow)


@dataclass
class Chat:
    """A conversation and its stored messages."""

    owner: ChatOwner
    title: str
    chat_id: str = field(default_factory=lambda: str(uuid4()))
    messages: list[ChatMessage] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ChatSummary:
    """A chat without its messages, for listings."""

    chat_id: str
    title: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PromptMessage:
    """A message as sent to the completion provider.

    Unlike stored messages the role is free-form ("system" is allowed).
    """

    role: str
    content: str


@dataclass(frozen=True)
class CompletionChunk:
    """One increment of a streamed completion."""

    content: Optional[str] = None
    finish_reason: Optional[str] = None


class StreamEventType(Enum):
    CONTENT = "content"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class StreamEvent:
    """An event relayed to the client over server-sent events."""

    type: StreamEventType
    content: Optional[str] = None
    finish_reason: Optional[str] = None
    error: Optional[str] = None

    def to_payload(self) -> dict[str, str]:
        payload = {"type": self.type.value}
        if self.type is StreamEventType.CONTENT:
            payload["content"] = self.content or ""
        elif self.type is StreamEventType.DONE:
            payload["finish_reason"] = self.finish_reason or ""
        else:
            payload["error"] = self.error or ""
        return payload
