"""
Test suite for AI reply parsing.

System role: Verification of JSON extraction from model output
"""

import pytest

from studyhub.core.ai.response_parser import extract_json_payload, parse_ai_response
from studyhub.core.exceptions import ContentParseError


class TestExtractJsonPayload:
    """Test suite for extract_json_payload."""

    def test_prefers_fenced_block(self) -> None:
        """Test a ```json block wins over other braces."""
        # Arrange
        text = 'Intro {not json}\n```json\n{"a": 1}\n```\nOutro'

        # Act & Assert
        assert extract_json_payload(text) == '{"a": 1}'

    def test_falls_back_to_outer_braces(self) -> None:
        """Test first '{' through last '}' is used without a fence."""
        # Act & Assert
        assert extract_json_payload('Sure! {"a": {"b": 2}} Hope this helps') == '{"a": {"b": 2}}'

    def test_none_when_no_json(self) -> None:
        """Test plain prose yields None."""
        assert extract_json_payload("No structured content here") is None


class TestParseAIResponse:
    """Test suite for parse_ai_response."""

    def test_parses_fenced_json(self) -> None:
        """Test fenced replies parse into dicts."""
        # Arrange
        text = '```json\n{"flashcards": [{"question": "Q", "answer": "A"}]}\n```'

        # Act
        result = parse_ai_response(text)

        # Assert
        assert result["flashcards"][0]["question"] == "Q"

    def test_parses_json_with_surrounding_prose(self) -> None:
        """Test braces embedded in prose are found."""
        assert parse_ai_response('Here you go: {"quiz": []} Enjoy!') == {"quiz": []}

    @pytest.mark.parametrize(
        "text",
        [
            "I cannot help with that.",
            "{broken json",
            "[1, 2, 3]",
            '"just a string"',
            "",
        ],
    )
    def test_raises_on_unparseable_or_non_object(self, text: str) -> None:
        """Test prose, broken JSON and non-object JSON raise ContentParseError."""
        with pytest.raises(ContentParseError):
            parse_ai_response(text)
