"""
Chat session service orchestrator.

Saves, lists, updates and deletes a user's AI assistant conversations.
Stored message records are normalized on the way out so rows written by
older clients still satisfy the response schema.

Dependencies: studyhub.boundary.db.CRUD
System role: Chat session use case orchestration
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.boundary.db.CRUD.chat_session_crud import chat_session_crud
from studyhub.boundary.db.models.chat_session_model import ChatSessionModel
from studyhub.core.exceptions import ChatSessionNotFoundError
from studyhub.core.security.sanitizer import sanitize_html
from studyhub.models.chat_session import ChatSessionMessage

logger = logging.getLogger(__name__)


def normalize_message(raw: Any) -> dict[str, str]:
    """
    Coerce a stored message record into {role, content, timestamp}.

    Unknown roles become "user", content is stringified and sanitized, and
    a missing timestamp is filled with the current time.
    """
    record = raw if isinstance(raw, dict) else {"content": raw}
    role = record.get("role")
    timestamp = record.get("timestamp")
    return {
        "role": role if role in ("user", "assistant") else "user",
        "content": sanitize_html(str(record.get("content") if record.get("content") is not None else "")),
        "timestamp": str(timestamp) if timestamp else datetime.now(timezone.utc).isoformat(),
    }


def _dump_messages(messages: list[ChatSessionMessage]) -> list[dict[str, str]]:
    return [{**m.model_dump(), "content": sanitize_html(m.content)} for m in messages]


def _to_dict(chat_session: ChatSessionModel) -> dict:
    raw_messages = chat_session.messages if isinstance(chat_session.messages, list) else []
    return {
        "id": chat_session.id,
        "title": chat_session.title,
        "topic": chat_session.topic,
        "messages": [normalize_message(m) for m in raw_messages],
        "created_at": chat_session.created_at,
        "updated_at": chat_session.updated_at,
    }


class ChatSessionService:
    """Chat session service orchestrator scoped to one user."""

    def __init__(self, db: AsyncSession, user_id: str) -> None:
        """
        Initialize chat session service.

        Args:
            db: Async SQLAlchemy session
            user_id: Owner of every session this service touches
        """
        self.db = db
        self.user_id = user_id

    async def save_session(
        self,
        title: str,
        topic: str,
        messages: list[ChatSessionMessage],
    ) -> dict:
        """
        Save a conversation.

        Args:
            title: Display title
            topic: Topic the conversation was about
            messages: Ordered transcript

        Returns:
            dict: Saved session
        """
        chat_session = await chat_session_crud.create(
            self.db,
            user_id=self.user_id,
            title=title,
            topic=topic,
            messages=_dump_messages(messages),
        )
        logger.info(f"{__name__}:save_session - Saved id={chat_session.id} messages={len(messages)}")
        return _to_dict(chat_session)

    async def list_sessions(self, limit: int | None = None) -> list[dict]:
        """List the user's sessions, most recently updated first."""
        rows = await chat_session_crud.list_for_user(self.db, self.user_id, limit=limit)
        return [_to_dict(row) for row in rows]

    async def get_session(self, session_id: UUID) -> dict:
        """
        Get one session.

        Raises:
            ChatSessionNotFoundError: If the session does not exist or is not the user's
        """
        chat_session = await chat_session_crud.get_for_user(self.db, session_id, self.user_id)
        if not chat_session:
            raise ChatSessionNotFoundError(str(session_id))
        return _to_dict(chat_session)

    async def update_session(
        self,
        session_id: UUID,
        title: str | None = None,
        topic: str | None = None,
        messages: list[ChatSessionMessage] | None = None,
    ) -> dict:
        """
        Update title, topic or transcript of a session. None fields are left unchanged.

        Raises:
            ChatSessionNotFoundError: If the session does not exist or is not the user's
        """
        chat_session = await chat_session_crud.get_for_user(self.db, session_id, self.user_id)
        if not chat_session:
            raise ChatSessionNotFoundError(str(session_id))

        updated = await chat_session_crud.update_instance(
            self.db,
            chat_session,
            title=title,
            topic=topic,
            messages=_dump_messages(messages) if messages is not None else None,
        )
        return _to_dict(updated)

    async def delete_session(self, session_id: UUID) -> None:
        """
        Delete a session.

        Raises:
            ChatSessionNotFoundError: If the session does not exist or is not the user's
        """
        deleted = await chat_session_crud.delete_for_user(self.db, session_id, self.user_id)
        if not deleted:
            raise ChatSessionNotFoundError(str(session_id))
        logger.info(f"{__name__}:delete_session - Deleted id={session_id}")
