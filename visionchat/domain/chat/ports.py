"""
Port interfaces (ABCs) for the chat bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import AsyncGenerator, Optional

from visionchat.domain.chat.entities import (
    Chat,
    ChatMessage,
    ChatOwner,
    ChatSummary,
    CompletionChunk,
    PromptMessage,
)


class ChatRepository(ABC):
    """Port for persisting chats. Every method is scoped to one owner."""

    @abstractmethod
    def list_for_owner(self, owner: ChatOwner, limit: int) -> list[ChatSummary]:
        """Return the owner's chats, most recently updated first."""
        raise NotImplementedError

    @abstractmethod
    def get(self, owner: ChatOwner, chat_id: str) -> Optional[Chat]:
        """Return a chat with its messages, or None if missing or foreign."""
        raise NotImplementedError

    @abstractmethod
    def add(self, chat: Chat) -> None:
        raise NotImplementedError

    @abstractmethod
    def rename(self, owner: ChatOwner, chat_id: str, title: str) -> Optional[Chat]:
        """Set a new title; return the updated chat (without messages) or None."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, owner: ChatOwner, chat_id: str) -> bool:
        """Delete a chat and its messages; return False if nothing matched."""
        raise NotImplementedError

    @abstractmethod
    def append_messages(
        self,
        owner: ChatOwner,
        chat_id: str,
        messages: list[ChatMessage],
        new_title: Optional[str] = None,
    ) -> None:
        """Append messages (and optionally retitle) in one transaction."""
        raise NotImplementedError


class CompletionPort(ABC):
    """Port for a hosted chat-completion model."""

    @abstractmethod
    def stream(
        self,
        messages: list[PromptMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> AsyncGenerator[CompletionChunk, None]:
        """Yield completion chunks as the provider produces them.

        Callers that stop early must `aclose()` the generator to release
        the provider connection.

        Raises:
            CompletionError: On provider or transport failure.
        """
        raise NotImplementedError

    @abstractmethod
    async def complete(
        self,
        messages: list[PromptMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return a whole (non-streamed) completion.

        Raises:
            CompletionError: On provider or transport failure.
        """
        raise NotImplementedError
