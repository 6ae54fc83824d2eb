"""
Test suite for study content prompt templates.

System role: Verification of topic anchoring and message rendering
"""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from studyhub.core.ai.content_prompts import (
    CHAT_PROMPT,
    CONTENT_PROMPTS,
    build_chat_messages,
    build_generation_messages,
)
from studyhub.core.ai.content_schema import ContentType, Difficulty


class TestGenerationPrompts:
    """Test suite for content generation prompts."""

    def test_every_content_type_has_prompt(self) -> None:
        """Test all five content types have a system/human template."""
        # Assert
        assert set(CONTENT_PROMPTS) == set(ContentType)
        for prompt in CONTENT_PROMPTS.values():
            assert len(prompt.messages) == 2

    @pytest.mark.parametrize("content_type", list(ContentType))
    def test_system_message_anchors_topic(self, content_type: ContentType) -> None:
        """Test the rendered system prompt carries rules and topic constraint."""
        # Act
        messages = build_generation_messages(content_type, "Photosynthesis", Difficulty.HARD, 5)

        # Assert
        system, human = messages
        assert isinstance(system, SystemMessage)
        assert isinstance(human, HumanMessage)
        assert "CRITICAL RULES:" in system.content
        assert 'TOPIC CONSTRAINT: All content must be directly relevant to: "Photosynthesis"' in system.content
        assert "EXACT JSON format" in system.content
        assert "{topic}" not in system.content

    def test_flashcard_prompt_requests_count(self) -> None:
        """Test the requested count is rendered into the flashcard rules."""
        # Act
        system, _ = build_generation_messages(ContentType.FLASHCARDS, "Cells", Difficulty.EASY, 7)

        # Assert
        assert "Generate exactly 7 flashcards" in system.content
        assert '"flashcards": [' in system.content

    def test_user_prompt_includes_difficulty_and_subject(self) -> None:
        """Test difficulty and subject appear in the user message."""
        # Act
        _, human = build_generation_messages(
            ContentType.NOTES, "Cells", Difficulty.EASY, 3, subject="Biology"
        )

        # Assert
        assert "Difficulty Level: easy" in human.content
        assert "Subject Context: Biology" in human.content
        assert 'Generate notes content STRICTLY for "Cells" ONLY' in human.content

    def test_missing_subject_renders_general(self) -> None:
        """Test absent subject falls back to 'general'."""
        _, human = build_generation_messages(ContentType.QUIZZES, "Cells", Difficulty.MEDIUM, 3)
        assert "Subject Context: general" in human.content


class TestChatPrompt:
    """Test suite for chat prompt rendering."""

    def test_history_between_system_and_message(self) -> None:
        """Test prior turns are placed between system and new message."""
        # Act
        messages = build_chat_messages(
            "And the dark reactions?",
            [("user", "What is photosynthesis?"), ("assistant", "It is...")],
            subject="Biology",
        )

        # Assert
        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert isinstance(messages[2], AIMessage)
        assert messages[-1].content == "And the dark reactions?"
        assert len(messages) == 4
        assert "Subject context: Biology" in messages[0].content

    def test_chat_prompt_has_history_placeholder(self) -> None:
        """Test CHAT_PROMPT accepts a history variable."""
        assert "history" in CHAT_PROMPT.input_variables
