"""ORM models."""

from studyhub.boundary.db.models.chat_session_model import ChatSessionModel
from studyhub.boundary.db.models.security_event_model import SecurityEventModel

__all__ = ["ChatSessionModel", "SecurityEventModel"]
