"""
Use case: Stream an assistant reply and store the exchange.

Input: StreamReplyCommand (owner, chat_id, messages)
Output: async iterator of StreamEvent
Side effects: Appends the last user message and the full reply to the chat;
    may replace a placeholder title.
Failure cases (raised before streaming starts): EmptyConversationError,
    ChatServiceNotConfiguredError, ChatNotFoundError, CompletionError.
"""

import asyncio
import logging
from typing import AsyncGenerator, AsyncIterator, Optional

from visionchat.application.chat.dtos import StreamReplyCommand
from visionchat.domain.chat.entities import (
    Chat,
    ChatMessage,
    CompletionChunk,
    MessageRole,
    StreamEvent,
    StreamEventType,
)
from visionchat.domain.chat.errors import (
    ChatNotFoundError,
    ChatServiceNotConfiguredError,
    CompletionError,
    EmptyConversationError,
)
from visionchat.domain.chat.ports import ChatRepository, CompletionPort
from visionchat.domain.chat.titles import should_auto_title, simple_title

logger = logging.getLogger(__name__)


class StreamChatReplyUseCase:
    """Relays a streamed completion to the client chunk by chunk.

    `open` does every check that can still turn into a plain HTTP error:
    request shape, configuration, chat ownership, and the provider
    accepting the request (the first chunk is awaited up front). Once it
    returns, failures are reported in-band as an `error` event.

    The exchange is stored when the provider reports a finish reason,
    before the `done` event is sent. A storage failure is logged and
    the client still receives `done`. The upstream generator is closed
    whenever the relay ends, including on client disconnect.
    """

    def __init__(
        self,
        chat_repo: ChatRepository,
        completion_port: CompletionPort,
        model: str,
        max_tokens: int,
        temperature: float,
        configured: bool,
    ) -> None:
        self._chat_repo = chat_repo
        self._completion = completion_port
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._configured = configured

    async def open(self, command: StreamReplyCommand) -> AsyncIterator[StreamEvent]:
        """Validate the request and start the upstream stream.

        Returns:
            An async iterator of events to relay to the client.

        Raises:
            EmptyConversationError: If no messages were given.
            ChatServiceNotConfiguredError: If no provider key is configured.
            ChatNotFoundError: If the chat is missing or foreign.
            CompletionError: If the provider rejects the request.
        """
        if not command.messages:
            raise EmptyConversationError()
        if not self._configured:
            raise ChatServiceNotConfiguredError()

        chat = await asyncio.to_thread(self._chat_repo.get, command.owner, command.chat_id)
        if chat is None:
            raise ChatNotFoundError(command.chat_id)

        logger.info(
            "Streaming reply for chat=%s (%d prompt messages)",
            chat.chat_id,
            len(command.messages),
        )
        upstream = self._completion.stream(
            command.messages,
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        first = await anext(upstream, None)

        return self._relay(command, chat, upstream, first)

    async def _relay(
        self,
        command: StreamReplyCommand,
        chat: Chat,
        upstream: AsyncGenerator[CompletionChunk, None],
        first: Optional[CompletionChunk],
    ) -> AsyncIterator[StreamEvent]:
        reply: list[str] = []
        chunk = first

        try:
            while chunk is not None:
                if chunk.content:
                    reply.append(chunk.content)
                    yield StreamEvent(type=StreamEventType.CONTENT, content=chunk.content)

                if chunk.finish_reason:
                    await self._store_exchange(command, chat, "".join(reply))
                    yield StreamEvent(
                        type=StreamEventType.DONE, finish_reason=chunk.finish_reason
                    )
                    return

                chunk = await anext(upstream, None)
        except CompletionError as exc:
            logger.error("Streaming error for chat=%s: %s", chat.chat_id, exc.message)
            yield StreamEvent(
                type=StreamEventType.ERROR,
                error=exc.message or "An error occurred during streaming",
            )
        finally:
            await upstream.aclose()

    async def _store_exchange(
        self, command: StreamReplyCommand, chat: Chat, reply: str
    ) -> None:
        user_message = command.messages[-1]
        new_title = None
        if should_auto_title(chat.title, len(chat.messages)):
            new_title = simple_title(user_message.content)

        exchange = [
            ChatMessage(role=MessageRole.USER, content=user_message.content),
            ChatMessage(role=MessageRole.ASSISTANT, content=reply),
        ]
        try:
            await asyncio.to_thread(
                self._chat_repo.append_messages,
                command.owner,
                chat.chat_id,
                exchange,
                new_title,
            )
        except Exception:
            logger.exception("Error saving chat messages for chat=%s", chat.chat_id)
