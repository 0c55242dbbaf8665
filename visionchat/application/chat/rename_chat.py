"""
Use case: Rename a chat.

Input: RenameChatCommand (owner, chat_id, title)
Output: ChatResult
Side effects: Updates the chat title.
Failure cases: InvalidChatTitleError, ChatNotFoundError.
"""

from visionchat.application.chat.create_chat import clean_title
from visionchat.application.chat.dtos import ChatResult, RenameChatCommand
from visionchat.domain.chat.errors import ChatNotFoundError
from visionchat.domain.chat.ports import ChatRepository


class RenameChatUseCase:
    def __init__(self, chat_repo: ChatRepository) -> None:
        self._chat_repo = chat_repo

    def execute(self, command: RenameChatCommand) -> ChatResult:
        title = clean_title(command.title)
        chat = self._chat_repo.rename(command.owner, command.chat_id, title)
        if chat is None:
            raise ChatNotFoundError(command.chat_id)
        return ChatResult(
            chat_id=chat.chat_id,
            title=chat.title,
            created_at=chat.created_at,
            updated_at=chat.updated_at,
        )
