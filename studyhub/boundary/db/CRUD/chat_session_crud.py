"""
Chat session CRUD operations.

Owner-scoped queries for saved AI assistant conversations.

Dependencies: sqlalchemy, studyhub.boundary.db.models
System role: Chat session persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.boundary.db.CRUD.base_crud import BaseCRUD
from studyhub.boundary.db.models.chat_session_model import ChatSessionModel


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    """CRUD operations for ChatSessionModel, always filtered by owner."""

    def __init__(self) -> None:
        """Initialize ChatSessionCRUD with ChatSessionModel."""
        super().__init__(ChatSessionModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
    ) -> Sequence[ChatSessionModel]:
        """
        List a user's chat sessions, most recently updated first.

        Args:
            session: Async database session
            user_id: Owning user
            limit: Maximum number of sessions to return

        Returns:
            Sequence of ChatSessionModel
        """
        stmt = (
            select(ChatSessionModel)
            .where(ChatSessionModel.user_id == user_id)
            .order_by(ChatSessionModel.updated_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: str,
    ) -> ChatSessionModel | None:
        """Retrieve a chat session only if user_id owns it."""
        stmt = select(ChatSessionModel).where(
            ChatSessionModel.id == id,
            ChatSessionModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: str,
    ) -> bool:
        """Delete a chat session only if user_id owns it."""
        stmt = delete(ChatSessionModel).where(
            ChatSessionModel.id == id,
            ChatSessionModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


chat_session_crud = ChatSessionCRUD()
