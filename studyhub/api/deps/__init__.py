"""FastAPI dependencies."""

from studyhub.api.deps.dependencies import (
    ServiceCache,
    collect_notifications,
    get_ai_assistant_service,
    get_chat_session_service,
    get_current_user,
    get_notifier,
    get_passive_user,
    get_security_monitor,
    get_service_cache,
    get_settings_dependency,
    require_passive_user,
    require_user,
)

__all__ = [
    "ServiceCache",
    "collect_notifications",
    "get_ai_assistant_service",
    "get_chat_session_service",
    "get_current_user",
    "get_notifier",
    "get_passive_user",
    "get_security_monitor",
    "get_service_cache",
    "get_settings_dependency",
    "require_passive_user",
    "require_user",
]
