"""
Pydantic schemas for chat API request/response validation.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

TITLE_MAX_LEN = 100
CONTENT_MAX_LEN = 32_000
MAX_PROMPT_MESSAGES = 200


class ChatTitleRequest(BaseModel):
    """Request schema for creating or renaming a chat.

    Attributes:
        title: Chat title; trimmed, must not be blank.
    """

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LEN * 2)


class PromptMessageSchema(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str = Field(..., max_length=CONTENT_MAX_LEN)


class StreamChatRequest(BaseModel):
    """Request schema for the streaming chat endpoint.

    Attributes:
        messages: The whole prompt; the last entry is the new user message.
        chat_id: Chat in which the exchange is stored.
    """

    messages: list[PromptMessageSchema] = Field(..., max_length=MAX_PROMPT_MESSAGES)
    chat_id: str = Field(..., min_length=1, max_length=64)


class ChatMessageSchema(BaseModel):
    role: str
    content: str
    timestamp: datetime


class ChatSchema(BaseModel):
    chat_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    messages: list[ChatMessageSchema] = []


class ChatSummarySchema(BaseModel):
    chat_id: str
    title: str
    created_at: datetime
    updated_at: datetime


class ChatListResponse(BaseModel):
    chats: list[ChatSummarySchema]


class ChatResponse(BaseModel):
    chat: ChatSchema


class ChatTitleResponse(BaseModel):
    """Response schema for title regeneration."""

    chat_id: str
    title: str
    updated_at: datetime
