"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ChatSessionModel, SecurityEventModel: Persisted entities
  - chat_session_crud, security_event_crud: CRUD operation singletons
  - DatabaseAuditSink: AuditSink writing to security_events

Dependencies: sqlalchemy, studyhub.configs
System role: Database adapter for chat sessions and the security audit log
"""

from studyhub.boundary.db.base import Base, TimestampMixin, UUIDMixin
from studyhub.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from studyhub.boundary.db.models import ChatSessionModel, SecurityEventModel
from studyhub.boundary.db.CRUD import (
    BaseCRUD,
    ChatSessionCRUD,
    SecurityEventCRUD,
    chat_session_crud,
    security_event_crud,
)
from studyhub.boundary.db.audit_sink import DatabaseAuditSink

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChatSessionModel",
    "SecurityEventModel",
    "BaseCRUD",
    "ChatSessionCRUD",
    "SecurityEventCRUD",
    "chat_session_crud",
    "security_event_crud",
    "DatabaseAuditSink",
]
