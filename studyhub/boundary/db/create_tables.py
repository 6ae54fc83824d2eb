"""
Database table creation script.

Creates the chat_sessions and security_events tables from the ORM
models' metadata.

Dependencies: sqlalchemy, studyhub.configs
System role: Database schema initialization

Usage:
    python -m studyhub.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from studyhub.boundary.db.base import Base
from studyhub.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from studyhub.boundary.db.models.chat_session_model import ChatSessionModel  # noqa: F401
from studyhub.boundary.db.models.security_event_model import SecurityEventModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all tables registered with Base.metadata.

    Idempotent: existing tables are left unchanged.

    Args:
        engine: Target engine (configured database when omitted)

    Raises:
        SQLAlchemyError: Connection or DDL failure
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Created {sorted(Base.metadata.tables)}")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all tables and their data.

    Irreversible. Development databases only.
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - Dropped all tables")


if __name__ == "__main__":
    from studyhub.observability import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
