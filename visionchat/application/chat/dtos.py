"""
Data Transfer Objects for the chat application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime

from visionchat.domain.chat.entities import ChatOwner, PromptMessage


@dataclass(frozen=True)
class ChatQuery:
    """Input DTO addressing one chat of one owner."""

    owner: ChatOwner
    chat_id: str


@dataclass(frozen=True)
class CreateChatCommand:
    owner: ChatOwner
    title: str


@dataclass(frozen=True)
class RenameChatCommand:
    owner: ChatOwner
    chat_id: str
    title: str


@dataclass(frozen=True)
class StreamReplyCommand:
    """Input DTO for streaming an assistant reply.

    Attributes:
        owner: The authenticated account.
        chat_id: Chat the exchange is stored in.
        messages: Full prompt as built by the client; the last entry is
            the new user message.
    """

    owner: ChatOwner
    chat_id: str
    messages: list[PromptMessage]


@dataclass(frozen=True)
class MessageResult:
    role: str
    content: str
    timestamp: datetime


@dataclass(frozen=True)
class ChatResult:
    """Output DTO for a chat; `messages` is empty for summaries."""

    chat_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    messages: list[MessageResult] = field(default_factory=list)
