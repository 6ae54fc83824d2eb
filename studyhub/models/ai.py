"""
AI assistant domain models and schemas.

Chat messages plus request/response schemas for content generation and chat.

Dependencies: pydantic
System role: AI assistant API contracts
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

from studyhub.models.notification import Notification


class ChatMessage(BaseModel):
    """One turn of a conversation. Content is always sanitized."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GenerateContentRequest(BaseModel):
    """Request schema for study content generation."""

    content_type: str = Field(default="flashcards", description="flashcards, mindmaps, quizzes, diagrams or notes")
    topic: str = Field(description="Topic to generate content about")
    difficulty: str = Field(default="medium", description="easy, medium or hard")
    count: int = Field(default=5, description="Number of items, clamped to 1-20")
    subject: str | None = Field(default=None, description="Optional subject context")


class GenerateContentResponse(BaseModel):
    """Response schema for study content generation."""

    content: dict[str, Any] | None = Field(description="Generated content, null when blocked")
    content_type: str
    notifications: list[Notification] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(description="User question or message")
    subject: str | None = Field(default=None, description="Optional subject context")


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    reply: ChatMessage | None = Field(description="Assistant reply, null when blocked or failed")
    messages: list[ChatMessage] = Field(description="Full conversation transcript")
    notifications: list[Notification] = Field(default_factory=list)
