"""CRUD operation classes and singletons."""

from studyhub.boundary.db.CRUD.base_crud import BaseCRUD
from studyhub.boundary.db.CRUD.chat_session_crud import ChatSessionCRUD, chat_session_crud
from studyhub.boundary.db.CRUD.security_event_crud import SecurityEventCRUD, security_event_crud

__all__ = [
    "BaseCRUD",
    "ChatSessionCRUD",
    "SecurityEventCRUD",
    "chat_session_crud",
    "security_event_crud",
]
