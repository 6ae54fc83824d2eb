"""API routers."""

from studyhub.api.routers.ai import router as ai_router
from studyhub.api.routers.chat_sessions import router as chat_sessions_router
from studyhub.api.routers.health import router as health_router
from studyhub.api.routers.security import router as security_router

__all__ = [
    "ai_router",
    "chat_sessions_router",
    "health_router",
    "security_router",
]
