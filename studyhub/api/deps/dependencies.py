"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(completion client, rate limiter, session registry, audit sink,
conversation transcripts) live in a process-wide ServiceCache; notifiers,
monitors and services are built per request.

Dependencies: studyhub.configs, studyhub.application, studyhub.boundary, studyhub.core.security
System role: DI container for service injection
"""

import logging
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.application.services import (
    AIAssistantService,
    ChatSessionService,
    ConversationStore,
)
from studyhub.boundary.db import DatabaseAuditSink, get_async_db, get_async_session_factory
from studyhub.boundary.llm import CompletionClient
from studyhub.configs import Settings, get_settings
from studyhub.core.notifier import NotificationCollector
from studyhub.core.security.monitor import SecurityMonitor
from studyhub.core.security.rate_limiter import RateLimiter, get_rate_limiter
from studyhub.core.security.session_registry import SessionRegistry
from studyhub.models.notification import Notification
from studyhub.models.user import CurrentUser

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._completion_client = None
        self._audit_sink = None
        self._session_registry = None
        self._conversation_store = None

    @property
    def completion_client(self) -> CompletionClient:
        """Get cached completion client."""
        if self._completion_client is None:
            self._completion_client = CompletionClient(settings=get_settings().llm)
        return self._completion_client

    @property
    def rate_limiter(self) -> RateLimiter:
        """Get the process-wide rate limiter."""
        return get_rate_limiter()

    @property
    def audit_sink(self) -> DatabaseAuditSink:
        """Get cached database audit sink."""
        if self._audit_sink is None:
            self._audit_sink = DatabaseAuditSink(get_async_session_factory())
        return self._audit_sink

    @property
    def session_registry(self) -> SessionRegistry:
        """Get cached session inactivity registry."""
        if self._session_registry is None:
            security = get_settings().security
            self._session_registry = SessionRegistry(
                audit_sink=self.audit_sink,
                warning_ms=security.session_warning_ms,
                expiry_ms=security.session_expiry_ms,
            )
        return self._session_registry

    @property
    def conversation_store(self) -> ConversationStore:
        """Get cached chat transcripts."""
        if self._conversation_store is None:
            self._conversation_store = ConversationStore()
        return self._conversation_store

    def clear(self) -> None:
        """Clear all cached instances."""
        if self._session_registry is not None:
            self._session_registry.clear()
        self._completion_client = None
        self._audit_sink = None
        self._session_registry = None
        self._conversation_store = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


async def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_type: str | None = Header(default=None),
    x_session_start: str | None = Header(default=None),
) -> CurrentUser:
    """
    Resolve the caller from gateway headers and record session activity.

    A request carrying ``X-Session-Start: true`` starts a fresh inactivity
    window; any other request from a known user counts as activity.

    Raises:
        HTTPException(401): The user's session expired from inactivity
    """
    if not x_user_id:
        return CurrentUser()

    registry = get_service_cache().session_registry
    if x_session_start and x_session_start.lower() == "true":
        registry.login(x_user_id)
    elif registry.touch(x_user_id) is None:
        logger.info(f"{__name__}:get_current_user - Rejected expired session user_id={x_user_id}")
        raise HTTPException(status_code=401, detail="Session expired")

    return CurrentUser(user_id=x_user_id, user_type=x_user_type or "registered")


async def get_passive_user(
    x_user_id: str | None = Header(default=None),
    x_user_type: str | None = Header(default=None),
) -> CurrentUser:
    """
    Resolve the caller without recording session activity.

    Status polls resolve the caller this way; they do not count as
    activity. Expired users are not rejected here.
    """
    if not x_user_id:
        return CurrentUser()
    return CurrentUser(user_id=x_user_id, user_type=x_user_type or "registered")


def require_user(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    Require an authenticated caller.

    Raises:
        HTTPException(401): No user identity on the request
    """
    if not user.is_authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def require_passive_user(user: CurrentUser = Depends(get_passive_user)) -> CurrentUser:
    """Require an authenticated caller without recording activity."""
    return require_user(user)


def get_notifier(request: Request) -> NotificationCollector:
    """
    Per-request notice collector.

    Stored on request state so exception handlers can return notices
    raised before the failure.
    """
    notifier = NotificationCollector()
    request.state.notifier = notifier
    return notifier


def collect_notifications(
    user: CurrentUser,
    notifier: NotificationCollector,
) -> list[Notification]:
    """Queued timer notices for the user followed by this request's notices."""
    queued = []
    if user.user_id:
        queued = get_service_cache().session_registry.drain_notifications(user.user_id)
    return queued + notifier.drain()


def get_security_monitor(
    user: CurrentUser = Depends(get_current_user),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SecurityMonitor:
    """
    Get security monitor bound to the caller.

    Returns:
        SecurityMonitor: Monitor writing to the database audit log
    """
    return SecurityMonitor(
        notifier=notifier,
        audit_sink=get_service_cache().audit_sink,
        user_id=user.user_id,
    )


def get_ai_assistant_service(
    user: CurrentUser = Depends(get_current_user),
    notifier: NotificationCollector = Depends(get_notifier),
    security_monitor: SecurityMonitor = Depends(get_security_monitor),
) -> AIAssistantService:
    """
    Get AI assistant service for the caller.

    Authenticated users keep their transcript across requests; anonymous
    callers get a fresh one.

    Returns:
        AIAssistantService: Service wired to the cached completion client
    """
    cache = get_service_cache()
    settings = get_settings()
    transcript = cache.conversation_store.transcript(user.user_id) if user.user_id else []
    return AIAssistantService(
        completion_client=cache.completion_client,
        security_monitor=security_monitor,
        notifier=notifier,
        user_id=user.user_id,
        rate_limiter=cache.rate_limiter,
        transcript=transcript,
        settings=settings.security,
        context_window=settings.llm.context_window,
        is_development=settings.is_development,
    )


def get_chat_session_service(
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_async_db),
) -> ChatSessionService:
    """
    Get chat session service scoped to the caller.

    Args:
        user: Authenticated caller
        db: Async database session (injected via Depends)

    Returns:
        ChatSessionService: Chat session service instance
    """
    return ChatSessionService(db=db, user_id=user.user_id)
