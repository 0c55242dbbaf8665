"""
Use case: Regenerate a chat title with the model.

Input: ChatQuery (owner, chat_id)
Output: ChatResult
Side effects: Updates the chat title.
Failure cases: ChatServiceNotConfiguredError, ChatNotFoundError, EmptyChatError.
"""

import asyncio
import logging

from visionchat.application.chat.dtos import ChatQuery, ChatResult
from visionchat.domain.chat.entities import ChatMessage, MessageRole, PromptMessage
from visionchat.domain.chat.errors import (
    ChatNotFoundError,
    ChatServiceNotConfiguredError,
    CompletionError,
    EmptyChatError,
)
from visionchat.domain.chat.ports import ChatRepository, CompletionPort
from visionchat.domain.chat.titles import (
    DEFAULT_TITLE,
    accept_generated_title,
    simple_title,
)

logger = logging.getLogger(__name__)

TITLE_SOURCE_MESSAGES = 2
TITLE_MAX_TOKENS = 20
TITLE_TEMPERATURE = 0.3

TITLE_SYSTEM_PROMPT = """You are a helpful assistant that creates concise, descriptive titles for conversations.

Rules:
- Generate a short, descriptive title (2-6 words max)
- Focus on the main topic or question
- Be specific but concise
- Don't include generic words like "chat", "conversation", "question"
- Use title case
- If it's a coding question, mention the language/technology
- If it's a general question, capture the essence

Examples:
- "How to center a div in CSS" -> "CSS Div Centering"
- "What is machine learning?" -> "Machine Learning Basics"
- "Recipe for chocolate cake" -> "Chocolate Cake Recipe"
- "Debug Python error" -> "Python Debugging Help"

Respond with ONLY the title, nothing else."""


class RegenerateTitleUseCase:
    """Asks a small model for a title based on the opening user messages.

    Falls back to the rule-based title when the model answer is unusable
    or the provider fails.
    """

    def __init__(
        self,
        chat_repo: ChatRepository,
        completion_port: CompletionPort,
        model: str,
        configured: bool,
    ) -> None:
        self._chat_repo = chat_repo
        self._completion = completion_port
        self._model = model
        self._configured = configured

    async def execute(self, query: ChatQuery) -> ChatResult:
        if not self._configured:
            raise ChatServiceNotConfiguredError()

        chat = await asyncio.to_thread(self._chat_repo.get, query.owner, query.chat_id)
        if chat is None:
            raise ChatNotFoundError(query.chat_id)
        if not chat.messages:
            raise EmptyChatError()

        title = await self.generate(chat.messages)
        updated = await asyncio.to_thread(
            self._chat_repo.rename, query.owner, query.chat_id, title
        )
        if updated is None:
            raise ChatNotFoundError(query.chat_id)

        logger.info("Regenerated title for chat=%s", query.chat_id)
        return ChatResult(
            chat_id=updated.chat_id,
            title=updated.title,
            created_at=updated.created_at,
            updated_at=updated.updated_at,
        )

    async def generate(self, messages: list[ChatMessage]) -> str:
        """Return a title for a conversation."""
        opening = "\n\n".join(
            [m.content for m in messages if m.role is MessageRole.USER][:TITLE_SOURCE_MESSAGES]
        )
        if not opening.strip():
            return DEFAULT_TITLE

        prompt = [
            PromptMessage(role="system", content=TITLE_SYSTEM_PROMPT),
            PromptMessage(
                role="user",
                content=f"Generate a title for this conversation:\n\n{opening}",
            ),
        ]
        try:
            answer = await self._completion.complete(
                prompt,
                model=self._model,
                max_tokens=TITLE_MAX_TOKENS,
                temperature=TITLE_TEMPERATURE,
            )
        except CompletionError as exc:
            logger.warning("Title generation failed, using fallback: %s", exc.message)
            first = messages[0].content if messages else DEFAULT_TITLE
            return simple_title(first)

        return accept_generated_title(answer) or simple_title(opening)
