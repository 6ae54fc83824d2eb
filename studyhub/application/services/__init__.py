"""
Application services.

Use case orchestration between the API layer and the core/boundary layers.
"""

from studyhub.application.services.ai_assistant_service import (
    AIAssistantService,
    ConversationStore,
)
from studyhub.application.services.chat_session_service import ChatSessionService

__all__ = [
    "AIAssistantService",
    "ConversationStore",
    "ChatSessionService",
]
