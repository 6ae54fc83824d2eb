"""
Security event CRUD operations.

Insert and read-back for the audit log. Events are never updated.

Dependencies: sqlalchemy, studyhub.boundary.db.models
System role: Audit log persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.boundary.db.CRUD.base_crud import BaseCRUD
from studyhub.boundary.db.models.security_event_model import SecurityEventModel


class SecurityEventCRUD(BaseCRUD[SecurityEventModel]):
    """CRUD operations for SecurityEventModel."""

    def __init__(self) -> None:
        """Initialize SecurityEventCRUD with SecurityEventModel."""
        super().__init__(SecurityEventModel)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        event_type: str | None = None,
        limit: int = 100,
    ) -> Sequence[SecurityEventModel]:
        """
        List a user's events, newest first.

        Args:
            session: Async database session
            user_id: Affected user
            event_type: Optional event type filter
            limit: Maximum rows

        Returns:
            Sequence of SecurityEventModel
        """
        stmt = select(SecurityEventModel).where(SecurityEventModel.user_id == user_id)
        if event_type is not None:
            stmt = stmt.where(SecurityEventModel.event_type == event_type)
        stmt = stmt.order_by(SecurityEventModel.occurred_at.desc()).limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


security_event_crud = SecurityEventCRUD()
