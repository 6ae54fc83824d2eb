"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory database, fake clock/scheduler for timers, recording
audit sink, notifier and completion-client fakes
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from studyhub.core.notifier import NotificationCollector
from studyhub.core.security.monitor import AuditSink, SecurityMonitor
from studyhub.core.security.rate_limiter import InMemoryRateLimitStore, RateLimiter
from studyhub.core.security.session_timeout import Scheduler


class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class _FakeTimer:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler(Scheduler):
    """Scheduler driven by a ManualClock; timers fire only on run_due()."""

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self.timers: list[_FakeTimer] = []

    def call_later(self, delay_ms, callback):
        timer = _FakeTimer(self.clock() + delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[_FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    async def advance(self, ms: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.clock() + ms
        while True:
            due = sorted(
                (t for t in self.pending if t.due <= target),
                key=lambda t: t.due,
            )
            if not due:
                break
            timer = due[0]
            self.clock.now = max(self.clock.now, timer.due)
            timer.cancelled = True
            await timer.callback()
        self.clock.now = target


class RecordingAuditSink(AuditSink):
    """AuditSink keeping events in memory."""

    def __init__(self) -> None:
        self.events = []

    async def write(self, event) -> None:
        self.events.append(event)

    def of_type(self, event_type) -> list:
        return [e for e in self.events if e.type == event_type]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock) -> FakeScheduler:
    return FakeScheduler(clock)


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def notifier() -> NotificationCollector:
    return NotificationCollector()


@pytest.fixture
def security_monitor(notifier, audit_sink) -> SecurityMonitor:
    return SecurityMonitor(notifier=notifier, audit_sink=audit_sink, user_id="user-1")


@pytest.fixture
def rate_limiter(clock) -> RateLimiter:
    return RateLimiter(store=InMemoryRateLimitStore(), clock=clock)


@pytest.fixture
def mock_completion_client():
    """
    Create mock CompletionClient.

    Returns:
        AsyncMock: acomplete returns a canned flashcard reply by default
    """
    client = AsyncMock()
    client.acomplete = AsyncMock(
        return_value='{"flashcards": [{"question": "Q1", "answer": "A1", "hint": "H1"}]}'
    )
    return client


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from studyhub.boundary.db.base import Base
    import studyhub.boundary.db.models  # noqa: F401  (registers tables)

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_session_factory():
    """
    In-memory database session factory, for code that opens its own sessions.

    Yields:
        async_sessionmaker: Factory bound to a fresh in-memory database
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from studyhub.boundary.db.base import Base
    import studyhub.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
