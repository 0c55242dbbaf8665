"""
Use case: Create an empty chat.

Input: CreateChatCommand (owner, title)
Output: ChatResult
Side effects: Inserts a chat.
Failure cases: InvalidChatTitleError.
"""

import logging

from visionchat.application.chat.dtos import ChatResult, CreateChatCommand
from visionchat.domain.chat.entities import TITLE_MAX_LENGTH, Chat
from visionchat.domain.chat.errors import InvalidChatTitleError
from visionchat.domain.chat.ports import ChatRepository

logger = logging.getLogger(__name__)


def clean_title(title: str) -> str:
    """Trim a user-supplied title, rejecting blanks and capping the length."""
    cleaned = title.strip()
    if not cleaned:
        raise InvalidChatTitleError()
    return cleaned[:TITLE_MAX_LENGTH]


class CreateChatUseCase:
    def __init__(self, chat_repo: ChatRepository) -> None:
        self._chat_repo = chat_repo

    def execute(self, command: CreateChatCommand) -> ChatResult:
        chat = Chat(owner=command.owner, title=clean_title(command.title))
        self._chat_repo.add(chat)
        logger.info("Created chat %s", chat.chat_id)
        return ChatResult(
            chat_id=chat.chat_id,
            title=chat.title,
            created_at=chat.created_at,
            updated_at=chat.updated_at,
        )
