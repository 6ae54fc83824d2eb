"""
Fixed-window rate limiter.

Bounds how often an identifier may perform an action. The window starts
at the identifier's first request and resets once it has elapsed, so a
burst at the end of one window followed by a burst at the start of the
next is allowed.

Dependencies: threading, time (stdlib)
System role: Request throttling for chat and content generation
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class RateLimitEntry:
    """Request count for one identifier within its current window."""

    count: int
    reset_time: float


class RateLimitStore(ABC):
    """Key-value storage for rate-limit entries."""

    @abstractmethod
    def get(self, key: str) -> RateLimitEntry | None:
        """Return the entry for key, or None."""

    @abstractmethod
    def set(self, key: str, entry: RateLimitEntry) -> None:
        """Store entry under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Iterate over stored keys."""


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local dict-backed store."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def get(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def set(self, key: str, entry: RateLimitEntry) -> None:
        self._entries[key] = entry

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)


class RateLimiter:
    """
    Fixed-window limiter over a pluggable store.

    Check-then-increment is serialized by a lock so concurrent requests
    cannot both slip past the boundary.
    """

    def __init__(
        self,
        store: RateLimitStore | None = None,
        clock: Clock = _now_ms,
    ) -> None:
        """
        Initialize limiter.

        Args:
            store: Entry storage (in-memory when omitted)
            clock: Returns the current time in milliseconds
        """
        self.store = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock
        self._lock = threading.Lock()

    def check(self, identifier: str, max_requests: int, window_ms: int) -> bool:
        """
        Record one request for identifier and report whether it is allowed.

        Args:
            identifier: Rate-limit key, e.g. "ai_chat_<user>"
            max_requests: Requests allowed per window
            window_ms: Window length in milliseconds

        Returns:
            bool: True if allowed, False once the window limit is reached
        """
        with self._lock:
            now = self._clock()
            existing = self.store.get(identifier)

            if existing is None or now > existing.reset_time:
                self.store.set(identifier, RateLimitEntry(count=1, reset_time=now + window_ms))
                return True

            if existing.count >= max_requests:
                logger.info(f"{__name__}:check - denied identifier={identifier}")
                return False

            existing.count += 1
            self.store.set(identifier, existing)
            return True

    def retry_after_ms(self, identifier: str) -> int:
        """Milliseconds until identifier's window resets (0 if none)."""
        entry = self.store.get(identifier)
        if entry is None:
            return 0
        return max(0, int(entry.reset_time - self._clock()))

    def sweep_expired(self) -> int:
        """
        Delete entries whose window has elapsed.

        Returns:
            int: Number of entries removed
        """
        removed = 0
        with self._lock:
            now = self._clock()
            for key in list(self.store.keys()):
                entry = self.store.get(key)
                if entry is not None and now > entry.reset_time:
                    self.store.delete(key)
                    removed += 1
        if removed:
            logger.debug(f"{__name__}:sweep_expired - removed={removed}")
        return removed


def chat_rate_key(user_id: str | None) -> str:
    """Rate-limit key for chat messages."""
    return f"ai_chat_{user_id or 'anonymous'}"


def generate_rate_key(user_id: str | None) -> str:
    """Rate-limit key for content generation."""
    return f"ai_generate_{user_id or 'anonymous'}"


_default_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    """Get the process-wide limiter."""
    return _default_limiter


def reset_rate_limiter() -> None:
    """Replace the process-wide limiter with an empty one."""
    global _default_limiter
    _default_limiter = RateLimiter()


def check_rate_limit(identifier: str, max_requests: int, window_ms: int) -> bool:
    """Check identifier against the process-wide limiter."""
    return _default_limiter.check(identifier, max_requests, window_ms)
