"""
Chat session domain models and schemas.

Request/response schemas for saved conversations.

Dependencies: pydantic
System role: Chat session API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class ChatSessionMessage(BaseModel):
    """Stored message record."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: str


class CreateChatSessionRequest(BaseModel):
    """Request schema for saving a conversation."""

    title: str = Field(min_length=1, max_length=200)
    topic: str = Field(default="", max_length=200)
    messages: list[ChatSessionMessage] = Field(default_factory=list)


class UpdateChatSessionRequest(BaseModel):
    """Request schema for updating a saved conversation."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    topic: str | None = Field(default=None, max_length=200)
    messages: list[ChatSessionMessage] | None = None


class ChatSessionResponse(BaseModel):
    """Response schema for a saved conversation."""

    id: uuid.UUID
    title: str
    topic: str
    messages: list[ChatSessionMessage]
    created_at: datetime
    updated_at: datetime
