"""
Use case: List the chats of the authenticated account.

Input: ChatOwner
Output: list[ChatResult] (summaries, newest first)
Side effects: None.
Failure cases: None.
"""

from visionchat.application.chat.dtos import ChatResult
from visionchat.domain.chat.entities import ChatOwner
from visionchat.domain.chat.ports import ChatRepository

MAX_LISTED_CHATS = 50


class ListChatsUseCase:
    def __init__(self, chat_repo: ChatRepository) -> None:
        self._chat_repo = chat_repo

    def execute(self, owner: ChatOwner) -> list[ChatResult]:
        return [
            ChatResult(
                chat_id=s.chat_id,
                title=s.title,
                created_at=s.created_at,
                updated_at=s.updated_at,
            )
            for s in self._chat_repo.list_for_owner(owner, limit=MAX_LISTED_CHATS)
        ]
