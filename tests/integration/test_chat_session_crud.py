"""
Test suite for ChatSessionCRUD and BaseCRUD database operations.

System role: Verification of chat session persistence layer
"""

import uuid

import pytest

from studyhub.boundary.db.CRUD.chat_session_crud import ChatSessionCRUD, chat_session_crud
from studyhub.boundary.db.models.chat_session_model import ChatSessionModel


class TestChatSessionCRUDInit:
    """Test suite for ChatSessionCRUD initialization."""

    def test_init_should_set_model(self) -> None:
        """Test ChatSessionCRUD targets ChatSessionModel."""
        assert ChatSessionCRUD().model == ChatSessionModel


class TestChatSessionCRUD:
    """Test suite for owner-scoped chat session queries."""

    async def test_create_sets_id_and_timestamps(self, test_async_db) -> None:
        """Test create returns a refreshed row."""
        # Act
        row = await chat_session_crud.create(
            test_async_db, user_id="u", title="T", topic="", messages=[]
        )

        # Assert
        assert isinstance(row.id, uuid.UUID)
        assert row.created_at is not None
        assert row.updated_at is not None

    async def test_get_by_id(self, test_async_db) -> None:
        """Test BaseCRUD.get_by_id finds a row regardless of owner."""
        # Arrange
        row = await chat_session_crud.create(test_async_db, user_id="u", title="T", messages=[])

        # Act & Assert
        assert (await chat_session_crud.get_by_id(test_async_db, row.id)).title == "T"
        assert await chat_session_crud.get_by_id(test_async_db, uuid.uuid4()) is None

    async def test_get_for_user_checks_owner(self, test_async_db) -> None:
        """Test get_for_user returns None for another owner."""
        # Arrange
        row = await chat_session_crud.create(test_async_db, user_id="owner", title="T", messages=[])

        # Act & Assert
        assert await chat_session_crud.get_for_user(test_async_db, row.id, "owner") is not None
        assert await chat_session_crud.get_for_user(test_async_db, row.id, "intruder") is None

    async def test_list_for_user_with_limit(self, test_async_db) -> None:
        """Test the limit caps the listed sessions."""
        # Arrange
        for i in range(4):
            await chat_session_crud.create(test_async_db, user_id="u", title=f"T{i}", messages=[])

        # Act
        rows = await chat_session_crud.list_for_user(test_async_db, "u", limit=2)

        # Assert
        assert len(rows) == 2

    async def test_delete_for_user(self, test_async_db) -> None:
        """Test only the owner can delete."""
        # Arrange
        row = await chat_session_crud.create(test_async_db, user_id="owner", title="T", messages=[])

        # Act & Assert
        assert await chat_session_crud.delete_for_user(test_async_db, row.id, "intruder") is False
        assert await chat_session_crud.delete_for_user(test_async_db, row.id, "owner") is True
        assert await chat_session_crud.get_by_id(test_async_db, row.id) is None

    async def test_delete_by_id(self, test_async_db) -> None:
        """Test BaseCRUD.delete_by_id reports whether a row was removed."""
        # Arrange
        row = await chat_session_crud.create(test_async_db, user_id="u", title="T", messages=[])

        # Act & Assert
        assert await chat_session_crud.delete_by_id(test_async_db, row.id) is True
        assert await chat_session_crud.delete_by_id(test_async_db, row.id) is False
