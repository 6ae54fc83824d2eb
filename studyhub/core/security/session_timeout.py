"""
Session inactivity state machine.

INACTIVE -> ACTIVE -> WARNING_ISSUED -> EXPIRED. Every tracked
interaction moves the session back to ACTIVE and pushes the warning
deadline to ``last_activity + warning_ms``. The expiry deadline is
``last_activity + expiry_ms``. Only one timer is ever pending; it is
cancelled before a new one is scheduled, and callbacks carry a
generation number so a firing that raced a reschedule is ignored.

Dependencies: asyncio, studyhub.core.security.monitor
System role: Inactivity warning and automatic sign-out
"""

import asyncio
import functools
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol

from studyhub.core.security.monitor import SecurityMonitor
from studyhub.models.security import SecurityEvent, SecurityEventType

logger = logging.getLogger(__name__)

SESSION_WARNING_MS = 30 * 60 * 1000
SESSION_EXPIRY_MS = 35 * 60 * 1000

TimerCallback = Callable[[], Awaitable[None]]


class TimerHandle(Protocol):
    """Cancellable pending callback."""

    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Runs an async callback after a delay."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        """Schedule callback to run after delay_ms milliseconds."""


class _AsyncioTimer:
    """asyncio timer that runs an async callback as a task when due."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay_ms: float,
        callback: TimerCallback,
        tasks: set[asyncio.Task],
    ) -> None:
        self._loop = loop
        self._callback = callback
        self._tasks = tasks
        self._handle = loop.call_later(delay_ms / 1000, self._fire)

    def _fire(self) -> None:
        # The loop only keeps weak references to tasks
        task = self._loop.create_task(self._run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self) -> None:
        try:
            await self._callback()
        except Exception:
            logger.exception(f"{__name__}:_run - session timer callback failed")

    def cancel(self) -> None:
        # Only the pending handle is cancelled. A callback that is already
        # running may be the caller and must not be interrupted.
        self._handle.cancel()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running event loop.

    Holds the tasks of fired callbacks until they finish.
    """

    def __init__(self) -> None:
        self.running: set[asyncio.Task] = set()

    def call_later(self, delay_ms: float, callback: TimerCallback) -> TimerHandle:
        return _AsyncioTimer(asyncio.get_running_loop(), delay_ms, callback, self.running)


class SessionState(str, Enum):
    """Inactivity states of an authenticated session."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    WARNING_ISSUED = "warning_issued"
    EXPIRED = "expired"


SignOutAction = Callable[[], Awaitable[None]]


def _now_ms() -> float:
    return time.time() * 1000


class SessionTimeoutMonitor:
    """
    Inactivity timer for one authenticated session.

    Warning and expiry notices go through the security monitor's notifier;
    the warning is also recorded as a security event. Expiry invokes the
    sign-out action exactly once and is terminal until ``start()`` is
    called again for a fresh login.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        security_monitor: SecurityMonitor,
        sign_out: SignOutAction,
        clock: Callable[[], float] = _now_ms,
        warning_ms: int = SESSION_WARNING_MS,
        expiry_ms: int = SESSION_EXPIRY_MS,
    ) -> None:
        """
        Initialize session timeout monitor.

        Args:
            scheduler: Timer provider
            security_monitor: Notice and event sink for the session's user
            sign_out: Action terminating the session
            clock: Current time in milliseconds
            warning_ms: Idle time before the warning
            expiry_ms: Idle time before sign-out, measured from the same activity
        """
        if expiry_ms <= warning_ms:
            raise ValueError("expiry_ms must be greater than warning_ms")
        self._scheduler = scheduler
        self._security_monitor = security_monitor
        self._sign_out = sign_out
        self._clock = clock
        self.warning_ms = warning_ms
        self.expiry_ms = expiry_ms

        self.state = SessionState.INACTIVE
        self.last_activity: float | None = None
        self.deadline: float | None = None
        self._handle: TimerHandle | None = None
        self._generation = 0

    def start(self) -> None:
        """Begin tracking after a login."""
        logger.info(f"{__name__}:start - user_id={self._security_monitor.user_id}")
        self.state = SessionState.ACTIVE
        self._touch()

    def record_activity(self) -> None:
        """Register a user interaction; ignored unless the session is live."""
        if self.state not in (SessionState.ACTIVE, SessionState.WARNING_ISSUED):
            return
        self.state = SessionState.ACTIVE
        self._touch()

    def stop(self) -> None:
        """Stop tracking on logout or teardown."""
        self._cancel()
        self.state = SessionState.INACTIVE
        self.deadline = None

    def _touch(self) -> None:
        self.last_activity = self._clock()
        self._schedule(self.last_activity + self.warning_ms, self._fire_warning)

    def _cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(
        self,
        deadline: float,
        callback: Callable[[int], Awaitable[None]],
    ) -> None:
        self._cancel()
        self.deadline = deadline
        delay = max(0.0, deadline - self._clock())
        self._handle = self._scheduler.call_later(
            delay, functools.partial(callback, self._generation)
        )

    async def _fire_warning(self, generation: int) -> None:
        if generation != self._generation or self.state != SessionState.ACTIVE:
            return

        # Transition and reschedule before awaiting any side effect.
        warning_time = self._clock()
        self.state = SessionState.WARNING_ISSUED
        self._schedule(self.last_activity + self.expiry_ms, self._fire_expiry)

        monitor = self._security_monitor
        remaining_min = round((self.expiry_ms - self.warning_ms) / 60_000)
        monitor.notifier.notify(
            "Session Timeout Warning",
            f"Your session will expire in {remaining_min} minutes due to inactivity.",
            variant="destructive",
        )
        await monitor.log_security_event(SecurityEvent(
            type=SecurityEventType.SESSION_TIMEOUT_WARNING,
            user_id=monitor.user_id,
            details={"lastActivity": self.last_activity, "warning_time": warning_time},
        ))

    async def _fire_expiry(self, generation: int) -> None:
        if generation != self._generation or self.state != SessionState.WARNING_ISSUED:
            return

        self._cancel()
        self.state = SessionState.EXPIRED
        self.deadline = None

        logger.info(f"{__name__}:_fire_expiry - user_id={self._security_monitor.user_id}")
        self._security_monitor.notifier.notify(
            "Session Expired",
            "You have been logged out due to inactivity.",
            variant="destructive",
        )
        await self._sign_out()
