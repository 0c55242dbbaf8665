"""
Use case: Load one chat with its messages.

Input: ChatQuery (owner, chat_id)
Output: ChatResult
Side effects: None.
Failure cases: ChatNotFoundError.
"""

from visionchat.application.chat.dtos import ChatQuery, ChatResult, MessageResult
from visionchat.domain.chat.errors import ChatNotFoundError
from visionchat.domain.chat.ports import ChatRepository


class GetChatUseCase:
    def __init__(self, chat_repo: ChatRepository) -> None:
        self._chat_repo = chat_repo

    def execute(self, query: ChatQuery) -> ChatResult:
        chat = self._chat_repo.get(query.owner, query.chat_id)
        if chat is None:
            raise ChatNotFoundError(query.chat_id)
        return ChatResult(
            chat_id=chat.chat_id,
            title=chat.title,
            created_at=chat.created_at,
            updated_at=chat.updated_at,
            messages=[
                MessageResult(role=m.role.value, content=m.content, timestamp=m.timestamp)
                for m in chat.messages
            ],
        )
