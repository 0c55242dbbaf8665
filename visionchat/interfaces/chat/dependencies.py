"""
Dependency injection for the chat bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the chat context.
"""

from fastapi import Depends
from sqlalchemy.engine import Engine

from visionchat.application.chat.create_chat import CreateChatUseCase
from visionchat.application.chat.delete_chat import DeleteChatUseCase
from visionchat.application.chat.get_chat import GetChatUseCase
from visionchat.application.chat.list_chats import ListChatsUseCase
from visionchat.application.chat.regenerate_title import RegenerateTitleUseCase
from visionchat.application.chat.rename_chat import RenameChatUseCase
from visionchat.application.chat.stream_reply import StreamChatReplyUseCase
from visionchat.core.config import settings
from visionchat.domain.chat.ports import ChatRepository, CompletionPort
from visionchat.infrastructure.chat.chat_repository import ChatRepositoryAdapter
from visionchat.infrastructure.chat.openrouter_completion_adapter import (
    OpenRouterCompletionAdapter,
)
from visionchat.interfaces.dependencies import get_engine


def get_chat_repository(engine: Engine = Depends(get_engine)) -> ChatRepository:
    return ChatRepositoryAdapter(engine)


def get_completion_port() -> CompletionPort:
    """Build the OpenRouter client from application settings."""
    return OpenRouterCompletionAdapter(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        site_url=settings.site_url,
        app_title=settings.llm_app_title,
        timeout=settings.llm_timeout_seconds,
    )


def get_list_chats_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
) -> ListChatsUseCase:
    return ListChatsUseCase(chat_repo=chat_repo)


def get_create_chat_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
) -> CreateChatUseCase:
    return CreateChatUseCase(chat_repo=chat_repo)


def get_get_chat_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
) -> GetChatUseCase:
    return GetChatUseCase(chat_repo=chat_repo)


def get_rename_chat_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
) -> RenameChatUseCase:
    return RenameChatUseCase(chat_repo=chat_repo)


def get_delete_chat_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
) -> DeleteChatUseCase:
    return DeleteChatUseCase(chat_repo=chat_repo)


def get_stream_reply_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
    completion_port: CompletionPort = Depends(get_completion_port),
) -> StreamChatReplyUseCase:
    """Build StreamChatReplyUseCase with its infrastructure dependencies."""
    return StreamChatReplyUseCase(
        chat_repo=chat_repo,
        completion_port=completion_port,
        model=settings.chat_model,
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
        configured=bool(settings.llm_api_key),
    )


def get_regenerate_title_use_case(
    chat_repo: ChatRepository = Depends(get_chat_repository),
    completion_port: CompletionPort = Depends(get_completion_port),
) -> RegenerateTitleUseCase:
    return RegenerateTitleUseCase(
        chat_repo=chat_repo,
        completion_port=completion_port,
        model=settings.title_model,
        configured=bool(settings.llm_api_key),
    )
