"""
Database-backed audit sink.

Writes each security event as one row in its own short transaction so
it can be used from timer callbacks that run outside any request.

Dependencies: sqlalchemy, studyhub.boundary.db.CRUD
System role: Audit log append sink
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from studyhub.boundary.db.CRUD.security_event_crud import security_event_crud
from studyhub.core.security.monitor import AuditSink
from studyhub.models.security import SecurityEvent


class DatabaseAuditSink(AuditSink):
    """AuditSink that inserts into the security_events table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize sink.

        Args:
            session_factory: Factory for independent database sessions
        """
        self._session_factory = session_factory

    async def write(self, event: SecurityEvent) -> None:
        async with self._session_factory() as session:
            await security_event_crud.create(
                session,
                event_type=event.type.value,
                user_id=event.user_id,
                details=event.details,
                occurred_at=event.timestamp,
            )
            await session.commit()
