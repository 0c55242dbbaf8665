"""
FastAPI router for the chat bounded context.

All routes delegate to use cases. No business logic here.
Every route acts on behalf of the bearer-token account.

The streaming endpoint relays the assistant reply as server-sent
events through sse-starlette, one JSON `data` frame per event.
"""

import json
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request, status
from sse_starlette.sse import EventSourceResponse

from visionchat.application.chat.create_chat import CreateChatUseCase
from visionchat.application.chat.delete_chat import DeleteChatUseCase
from visionchat.application.chat.dtos import (
    ChatQuery,
    ChatResult,
    CreateChatCommand,
    RenameChatCommand,
    StreamReplyCommand,
)
from visionchat.application.chat.get_chat import GetChatUseCase
from visionchat.application.chat.list_chats import ListChatsUseCase
from visionchat.application.chat.regenerate_title import RegenerateTitleUseCase
from visionchat.application.chat.rename_chat import RenameChatUseCase
from visionchat.application.chat.stream_reply import StreamChatReplyUseCase
from visionchat.core.config import settings
from visionchat.domain.auth.entities import AuthenticatedUser
from visionchat.domain.chat.entities import ChatOwner, PromptMessage, StreamEvent
from visionchat.interfaces.chat.dependencies import (
    get_create_chat_use_case,
    get_delete_chat_use_case,
    get_get_chat_use_case,
    get_list_chats_use_case,
    get_regenerate_title_use_case,
    get_rename_chat_use_case,
    get_stream_reply_use_case,
)
from visionchat.interfaces.chat.schemas import (
    ChatListResponse,
    ChatMessageSchema,
    ChatResponse,
    ChatSchema,
    ChatSummarySchema,
    ChatTitleRequest,
    ChatTitleResponse,
    StreamChatRequest,
)
from visionchat.interfaces.dependencies import get_current_user
from visionchat.interfaces.schemas import ErrorResponse, MessageResponse
from visionchat.shared.security.rate_limiting import limiter

router = APIRouter(tags=["chat"])

SSE_HEADERS = {"Cache-Control": "no-cache"}


def _owner(user: AuthenticatedUser) -> ChatOwner:
    return ChatOwner(user_id=user.id, user_type=user.type)


def _chat(result: ChatResult) -> ChatSchema:
    return ChatSchema(
        chat_id=result.chat_id,
        title=result.title,
        created_at=result.created_at,
        updated_at=result.updated_at,
        messages=[
            ChatMessageSchema(role=m.role, content=m.content, timestamp=m.timestamp)
            for m in result.messages
        ],
    )


async def _sse_frames(events: AsyncIterator[StreamEvent]) -> AsyncIterator[dict]:
    async for event in events:
        yield {"data": json.dumps(event.to_payload())}


@router.get(
    "/chats",
    response_model=ChatListResponse,
    responses={401: {"model": ErrorResponse}},
    summary="List chats",
    description="The caller's 50 most recently updated chats, without messages.",
)
def list_chats(
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListChatsUseCase = Depends(get_list_chats_use_case),
) -> ChatListResponse:
    return ChatListResponse(
        chats=[
            ChatSummarySchema(
                chat_id=c.chat_id,
                title=c.title,
                created_at=c.created_at,
                updated_at=c.updated_at,
            )
            for c in use_case.execute(_owner(user))
        ]
    )


@router.post(
    "/chats",
    response_model=ChatResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Create an empty chat",
)
def create_chat(
    body: ChatTitleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateChatUseCase = Depends(get_create_chat_use_case),
) -> ChatResponse:
    result = use_case.execute(CreateChatCommand(owner=_owner(user), title=body.title))
    return ChatResponse(chat=_chat(result))


@router.get(
    "/chats/{chat_id}",
    response_model=ChatResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a chat with its messages",
)
def get_chat(
    chat_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetChatUseCase = Depends(get_get_chat_use_case),
) -> ChatResponse:
    result = use_case.execute(ChatQuery(owner=_owner(user), chat_id=chat_id))
    return ChatResponse(chat=_chat(result))


@router.put(
    "/chats/{chat_id}",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Rename a chat",
)
def rename_chat(
    chat_id: str,
    body: ChatTitleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: RenameChatUseCase = Depends(get_rename_chat_use_case),
) -> ChatResponse:
    result = use_case.execute(
        RenameChatCommand(owner=_owner(user), chat_id=chat_id, title=body.title)
    )
    return ChatResponse(chat=_chat(result))


@router.delete(
    "/chats/{chat_id}",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a chat and its messages",
)
def delete_chat(
    chat_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: DeleteChatUseCase = Depends(get_delete_chat_use_case),
) -> MessageResponse:
    use_case.execute(ChatQuery(owner=_owner(user), chat_id=chat_id))
    return MessageResponse(message="Chat deleted successfully")


@router.post(
    "/chats/{chat_id}/title",
    response_model=ChatTitleResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Regenerate a chat title with the LLM",
)
@limiter.limit(settings.rate_limit_heavy)
async def regenerate_title(
    request: Request,
    chat_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: RegenerateTitleUseCase = Depends(get_regenerate_title_use_case),
) -> ChatTitleResponse:
    result = await use_case.execute(ChatQuery(owner=_owner(user), chat_id=chat_id))
    return ChatTitleResponse(
        chat_id=result.chat_id, title=result.title, updated_at=result.updated_at
    )


@router.post(
    "/chat",
    response_class=EventSourceResponse,
    responses={
        200: {"content": {"text/event-stream": {}}},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
    summary="Stream an assistant reply",
    description=(
        "Relays the completion as server-sent events of type content, "
        "done or error. The exchange is stored before the done event."
    ),
)
@limiter.limit(settings.rate_limit_heavy)
async def stream_chat(
    request: Request,
    body: StreamChatRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: StreamChatReplyUseCase = Depends(get_stream_reply_use_case),
) -> EventSourceResponse:
    command = StreamReplyCommand(
        owner=_owner(user),
        chat_id=body.chat_id,
        messages=[PromptMessage(role=m.role, content=m.content) for m in body.messages],
    )
    events = await use_case.open(command)
    return EventSourceResponse(_sse_frames(events), headers=SSE_HEADERS, sep="\n")
