"""
Registry of live session timeout monitors.

Keeps one SessionTimeoutMonitor per authenticated user for the HTTP
surface. Notices raised by timers are queued per user and handed out on
the user's next request. Expired users stay marked until a fresh login.

Dependencies: studyhub.core.security.session_timeout
System role: Per-user inactivity tracking for the API
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from studyhub.core.notifier import NotificationCollector
from studyhub.core.security.monitor import AuditSink, SecurityMonitor
from studyhub.core.security.session_timeout import (
    SESSION_EXPIRY_MS,
    SESSION_WARNING_MS,
    AsyncioScheduler,
    Scheduler,
    SessionState,
    SessionTimeoutMonitor,
)
from studyhub.models.notification import Notification

logger = logging.getLogger(__name__)

SignOutHook = Callable[[str], Awaitable[None]]


@dataclass
class _TrackedSession:
    monitor: SessionTimeoutMonitor
    notices: NotificationCollector = field(default_factory=NotificationCollector)


class SessionRegistry:
    """Per-user inactivity monitors."""

    def __init__(
        self,
        audit_sink: AuditSink | None = None,
        scheduler: Scheduler | None = None,
        sign_out_hook: SignOutHook | None = None,
        warning_ms: int = SESSION_WARNING_MS,
        expiry_ms: int = SESSION_EXPIRY_MS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """
        Initialize registry.

        Args:
            audit_sink: Event store shared by all monitors
            scheduler: Timer provider (asyncio event loop when omitted)
            sign_out_hook: Extra action run when a user's session expires,
                e.g. revoking refresh tokens with the auth provider
            warning_ms: Idle time before the warning
            expiry_ms: Idle time before sign-out
            clock: Current time in milliseconds
        """
        self._audit_sink = audit_sink
        self._scheduler = scheduler or AsyncioScheduler()
        self._sign_out_hook = sign_out_hook
        self._warning_ms = warning_ms
        self._expiry_ms = expiry_ms
        self._clock = clock
        self._sessions: dict[str, _TrackedSession] = {}
        self._expired: set[str] = set()

    def login(self, user_id: str) -> SessionTimeoutMonitor:
        """Start (or restart) tracking for a fresh login.

        Notices left over from a previous session are discarded.
        """
        self._expired.discard(user_id)
        tracked = self._sessions.get(user_id)
        if tracked is None:
            tracked = self._create(user_id)
            self._sessions[user_id] = tracked
        else:
            tracked.notices.drain()
        tracked.monitor.start()
        return tracked.monitor

    def touch(self, user_id: str) -> SessionTimeoutMonitor | None:
        """
        Record activity for user.

        Returns:
            The user's monitor, or None when the session has expired
        """
        if user_id in self._expired:
            return None
        tracked = self._sessions.get(user_id)
        if tracked is None:
            return self.login(user_id)
        tracked.monitor.record_activity()
        return tracked.monitor

    def end(self, user_id: str) -> None:
        """Stop tracking on logout."""
        self._expired.discard(user_id)
        tracked = self._sessions.pop(user_id, None)
        if tracked is not None:
            tracked.monitor.stop()

    def is_expired(self, user_id: str) -> bool:
        return user_id in self._expired

    def state(self, user_id: str) -> SessionState:
        if user_id in self._expired:
            return SessionState.EXPIRED
        tracked = self._sessions.get(user_id)
        return tracked.monitor.state if tracked else SessionState.INACTIVE

    def monitor_for(self, user_id: str) -> SessionTimeoutMonitor | None:
        tracked = self._sessions.get(user_id)
        return tracked.monitor if tracked else None

    def drain_notifications(self, user_id: str) -> list[Notification]:
        """Hand out queued notices; an expired session is dropped once drained."""
        if user_id in self._expired:
            tracked = self._sessions.pop(user_id, None)
        else:
            tracked = self._sessions.get(user_id)
        return tracked.notices.drain() if tracked else []

    def clear(self) -> None:
        """Stop every monitor."""
        for tracked in self._sessions.values():
            tracked.monitor.stop()
        self._sessions.clear()
        self._expired.clear()

    def _create(self, user_id: str) -> _TrackedSession:
        notices = NotificationCollector()
        security_monitor = SecurityMonitor(
            notifier=notices,
            audit_sink=self._audit_sink,
            user_id=user_id,
        )

        async def sign_out() -> None:
            logger.info(f"{__name__}:sign_out - session expired user_id={user_id}")
            self._expired.add(user_id)
            if self._sign_out_hook is not None:
                await self._sign_out_hook(user_id)

        kwargs = {}
        if self._clock is not None:
            kwargs["clock"] = self._clock
        monitor = SessionTimeoutMonitor(
            scheduler=self._scheduler,
            security_monitor=security_monitor,
            sign_out=sign_out,
            warning_ms=self._warning_ms,
            expiry_ms=self._expiry_ms,
            **kwargs,
        )
        return _TrackedSession(monitor=monitor, notices=notices)
