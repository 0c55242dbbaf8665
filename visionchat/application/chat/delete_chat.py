"""
Use case: Delete a chat and its messages.

Input: ChatQuery (owner, chat_id)
Output: None
Side effects: Deletes the chat.
Failure cases: ChatNotFoundError.
"""

import logging

from visionchat.application.chat.dtos import ChatQuery
from visionchat.domain.chat.errors import ChatNotFoundError
from visionchat.domain.chat.ports import ChatRepository

logger = logging.getLogger(__name__)


class DeleteChatUseCase:
    def __init__(self, chat_repo: ChatRepository) -> None:
        self._chat_repo = chat_repo

    def execute(self, query: ChatQuery) -> None:
        if not self._chat_repo.delete(query.owner, query.chat_id):
            raise ChatNotFoundError(query.chat_id)
        logger.info("Deleted chat %s", query.chat_id)
