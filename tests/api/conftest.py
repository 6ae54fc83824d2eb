"""
API test fixtures.

Builds the full application with the service cache pointed at fakes:
a mocked completion client, an in-memory audit sink, a session registry
driven by a manual clock, and an in-memory SQLite database.

System role: HTTP test infrastructure
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from studyhub.api.deps.dependencies import get_service_cache
from studyhub.api.main import create_app
from studyhub.boundary.db import get_async_db
from studyhub.core.security.rate_limiter import reset_rate_limiter
from studyhub.core.security.session_registry import SessionRegistry


@pytest.fixture
def completion_client():
    """Mocked completion client returning one flashcard."""
    client = AsyncMock()
    client.acomplete = AsyncMock(
        return_value='{"flashcards": [{"question": "What is ATP?", "answer": "Energy currency", "hint": "cells"}]}'
    )
    return client


@pytest.fixture
def registry(audit_sink, scheduler, clock) -> SessionRegistry:
    return SessionRegistry(audit_sink=audit_sink, scheduler=scheduler, clock=clock)


@pytest.fixture
def db_override():
    """
    get_async_db replacement backed by in-memory SQLite.

    The engine is created lazily inside the app's event loop.
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from studyhub.boundary.db.base import Base
    import studyhub.boundary.db.models  # noqa: F401

    state = {}

    async def override_get_async_db():
        if "factory" not in state:
            engine = create_async_engine(
                "sqlite+aiosqlite:///:memory:",
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            state["factory"] = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        async with state["factory"]() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_async_db


@pytest.fixture
def client(completion_client, audit_sink, registry, db_override):
    """
    Provide TestClient for the full application.

    Yields:
        TestClient: Client running inside the app lifespan
    """
    reset_rate_limiter()
    cache = get_service_cache()
    cache.clear()
    cache._completion_client = completion_client
    cache._audit_sink = audit_sink
    cache._session_registry = registry

    app = create_app()
    app.dependency_overrides[get_async_db] = db_override

    with TestClient(app) as test_client:
        yield test_client

    cache.clear()
    reset_rate_limiter()


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"X-User-Id": "user-1", "X-User-Type": "registered"}
